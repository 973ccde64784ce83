"""
DataFlow Manifest — Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelas operações do core.

Objetivo:
- Permitir que builder, serializer e migrador levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para DataflowErrorPayload
- Evitar ValueError/RuntimeError genéricos em entradas não confiáveis

Regras:
- Nenhuma destas exceções é fatal: todas são resultados esperados de entrada inválida.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class DataflowException(Exception):
    """Base class para exceções do DataFlow Manifest.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Entrada da requisição
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidInput(DataflowException):
    """Formato da requisição inválido (ex.: quantidade de conectores, JSON embutido)."""


@dataclass(eq=False)
class InvalidConfig(DataflowException):
    """Config de geração (source/sink/transformação) não é um mapeamento válido."""


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ManifestParseError(DataflowException):
    """Texto do manifest não pôde ser interpretado como mapeamento navegável."""


# ---------------------------------------------------------------------------
# Migração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class AmbiguousConnectorRoles(DataflowException):
    """Dois conectores resolvidos para a mesma categoria (source/sink/unknown)."""
