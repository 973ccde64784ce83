"""
ConnectorCatalog v1 — catálogo determinístico de conectores DataFlow.

Conectores suportados, seus campos obrigatórios e opcionais são
centralizados e explícitos — sem inferência dinâmica.

Este módulo fornece:
- ConnectorCategory: papel de um conector (source, sink ou unknown)
- ConnectorDescriptor: especificação imutável de um conector
- ConnectorCatalog: ponto único de verdade para conectores (v1)

O mesmo tipo (ex.: `kafka`) existe como source e como sink, com campos
diferentes; por isso a chave do catálogo é o par (type, category).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple


class ConnectorCategory(str, Enum):
    """Papel de um conector no pipeline.

    UNKNOWN só aparece na classificação de configs legadas; descritores
    do catálogo são sempre SOURCE ou SINK.
    """

    SOURCE = "source"
    SINK = "sink"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConnectorDescriptor:
    """Especificação canônica de um conector suportado."""

    type: str
    category: ConnectorCategory
    description: str
    required_fields: FrozenSet[str] = frozenset()
    optional_fields: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "category": self.category.value,
            "description": self.description,
            "requiredFields": sorted(self.required_fields),
            "optionalFields": sorted(self.optional_fields),
        }


class ConnectorCatalog:
    """Catálogo imutável de ConnectorDescriptor.

    Construído uma vez; não expõe API de mutação. Leituras concorrentes
    não precisam de sincronização.
    """

    def __init__(self, descriptors: Iterable[ConnectorDescriptor]):
        index: Dict[Tuple[str, ConnectorCategory], ConnectorDescriptor] = {}
        for d in descriptors:
            if not isinstance(d, ConnectorDescriptor):
                raise TypeError("descriptor must be a ConnectorDescriptor")
            if not isinstance(d.type, str) or not d.type.strip():
                raise ValueError("connector type must be a non-empty string")
            if d.category is ConnectorCategory.UNKNOWN:
                raise ValueError(f"catalog connector must be source or sink: {d.type}")
            key = (d.type, d.category)
            if key in index:
                raise ValueError(f"connector already registered: {d.category.value}/{d.type}")
            index[key] = d
        self._index = index
        self._ordered = tuple(index[k] for k in sorted(index, key=lambda k: (k[0], k[1].value)))

    @classmethod
    def v1(cls) -> "ConnectorCatalog":
        """Factory do catálogo v1 (kafka, postgresql, trino)."""
        return cls(_default_descriptors_v1())

    def lookup(
        self, connector_type: str, category: Optional[ConnectorCategory] = None
    ) -> Optional[ConnectorDescriptor]:
        """Descritor do tipo; None quando ausente (não é erro).

        Sem `category`, devolve o primeiro descritor do tipo na ordem de
        `list()`. Use `lookup_any` para obter todas as categorias.
        """
        if category is None:
            return next((d for d in self._ordered if d.type == connector_type), None)
        return self._index.get((connector_type, category))

    def lookup_any(self, connector_type: str) -> List[ConnectorDescriptor]:
        return [d for d in self._ordered if d.type == connector_type]

    def types(self, category: ConnectorCategory) -> List[str]:
        return [d.type for d in self._ordered if d.category is category]

    def list(self) -> List[ConnectorDescriptor]:
        return list(self._ordered)


def _default_descriptors_v1() -> List[ConnectorDescriptor]:
    """Catálogo v1: kafka, postgresql e trino como source e como sink."""
    S, K = ConnectorCategory.SOURCE, ConnectorCategory.SINK
    return [
        ConnectorDescriptor(
            type="kafka",
            category=S,
            description="Read messages from Kafka topics",
            required_fields=frozenset({"brokers", "topic"}),
            optional_fields=frozenset({"consumerGroup", "tls", "sasl", "format", "avroSchema", "schemaRegistry"}),
        ),
        ConnectorDescriptor(
            type="postgresql",
            category=S,
            description="Read from PostgreSQL tables",
            required_fields=frozenset({"connectionString", "table"}),
            optional_fields=frozenset({"query", "pollInterval"}),
        ),
        ConnectorDescriptor(
            type="trino",
            category=S,
            description="Read from Trino tables",
            required_fields=frozenset({"serverURL", "catalog", "schema", "table"}),
            optional_fields=frozenset({"query", "pollInterval", "keycloak"}),
        ),
        ConnectorDescriptor(
            type="kafka",
            category=K,
            description="Write messages to Kafka topics",
            required_fields=frozenset({"brokers", "topic"}),
            optional_fields=frozenset({"tls", "sasl"}),
        ),
        ConnectorDescriptor(
            type="postgresql",
            category=K,
            description="Write to PostgreSQL tables",
            required_fields=frozenset({"connectionString", "table"}),
            optional_fields=frozenset({"batchSize", "autoCreateTable", "upsertMode", "conflictKey"}),
        ),
        ConnectorDescriptor(
            type="trino",
            category=K,
            description="Write to Trino tables",
            required_fields=frozenset({"serverURL", "catalog", "schema", "table"}),
            optional_fields=frozenset({"batchSize", "autoCreateTable", "keycloak"}),
        ),
    ]


CONNECTOR_CATALOG = ConnectorCatalog.v1()
