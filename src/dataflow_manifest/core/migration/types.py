"""
Tipos canônicos da migração Kafka Connect → DataFlow.

Componentes principais:
    - LegacyConnector  → conector Kafka Connect de entrada ({name, config})
    - MigratedField    → campo legado que tem equivalente no manifest
    - UnsupportedField → campo legado sem equivalente, com motivo legível
    - MigrationResult  → manifest + contabilidade explícita dos campos

Invariantes:
    - Tipos são imutáveis e criados a cada chamada de migração
    - A ordem das sequências reflete a ordem dos conectores e dos campos
      na config recebida
    - `to_dict` usa as chaves camelCase expostas ao chamador
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..manifest.model import Manifest


@dataclass(frozen=True)
class LegacyConnector:
    """Conector Kafka Connect como retornado pela REST API (`name` + `config`)."""

    name: str
    config: Dict[str, Any]


@dataclass(frozen=True)
class MigratedField:
    connector: str
    source_field: str
    target_field: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "connector": self.connector,
            "sourceField": self.source_field,
            "targetField": self.target_field,
        }


@dataclass(frozen=True)
class UnsupportedField:
    connector: str
    field: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"connector": self.connector, "field": self.field, "reason": self.reason}


@dataclass(frozen=True)
class MigrationResult:
    """
    Resultado imutável de uma migração.

    Campos:
        - manifest: manifest montado (sem transformações)
        - migrated_fields: campos legados traduzidos
        - unsupported_fields: campos legados sem equivalente
        - warnings: condições leves (classe desconhecida, lado ausente,
          campo obrigatório não preenchido)

    Limites explícitos:
        - Não contém texto serializado; a forma textual é decidida pela operação
    """

    manifest: Manifest
    migrated_fields: List[MigratedField] = field(default_factory=list)
    unsupported_fields: List[UnsupportedField] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manifest": self.manifest.to_dict(),
            "migratedFields": [f.to_dict() for f in self.migrated_fields],
            "unsupportedFields": [f.to_dict() for f in self.unsupported_fields],
            "warnings": list(self.warnings),
        }
