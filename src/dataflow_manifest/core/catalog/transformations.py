"""TransformationCatalog v1 — transformações DataFlow com exemplos.

Mesmo contrato do ConnectorCatalog: construído uma vez, imutável,
listagem ordenada por tipo.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class TransformationDescriptor:
    """Especificação canônica de uma transformação suportada."""

    type: str
    description: str
    example_config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "exampleConfig": deepcopy(self.example_config),
        }


class TransformationCatalog:
    """Catálogo imutável de TransformationDescriptor."""

    def __init__(self, descriptors: Iterable[TransformationDescriptor]):
        index: Dict[str, TransformationDescriptor] = {}
        for d in descriptors:
            if not isinstance(d, TransformationDescriptor):
                raise TypeError("descriptor must be a TransformationDescriptor")
            if not isinstance(d.type, str) or not d.type.strip():
                raise ValueError("transformation type must be a non-empty string")
            if d.type in index:
                raise ValueError(f"transformation already registered: {d.type}")
            index[d.type] = d
        self._index = index
        self._ordered = tuple(index[k] for k in sorted(index))

    @classmethod
    def v1(cls) -> "TransformationCatalog":
        return cls(_default_descriptors_v1())

    def lookup(self, transformation_type: str) -> Optional[TransformationDescriptor]:
        return self._index.get(transformation_type)

    def types(self) -> List[str]:
        return [d.type for d in self._ordered]

    def list(self) -> List[TransformationDescriptor]:
        return list(self._ordered)


def _default_descriptors_v1() -> List[TransformationDescriptor]:
    return [
        TransformationDescriptor(
            type="timestamp",
            description="Add timestamp to each message",
            example_config={"fieldName": "created_at", "format": "RFC3339"},
        ),
        TransformationDescriptor(
            type="flatten",
            description="Flatten array into separate messages",
            example_config={"field": "$.items"},
        ),
        TransformationDescriptor(
            type="filter",
            description="Filter messages by JSONPath condition",
            example_config={"condition": "$.level != 'error'"},
        ),
        TransformationDescriptor(
            type="mask",
            description="Mask sensitive fields",
            example_config={"fields": ["$.password", "$.token"], "maskChar": "*", "keepLength": True},
        ),
        TransformationDescriptor(
            type="router",
            description="Route messages to different sinks by condition",
            example_config={
                "routes": [
                    {
                        "condition": "$.level == 'error'",
                        "sink": {"type": "kafka", "config": {"brokers": ["localhost:9092"], "topic": "errors"}},
                    }
                ]
            },
        ),
        TransformationDescriptor(
            type="select",
            description="Select specific fields",
            example_config={"fields": ["$.id", "$.name", "$.timestamp"]},
        ),
        TransformationDescriptor(
            type="remove",
            description="Remove specific fields",
            example_config={"fields": ["$.password", "$.token"]},
        ),
        TransformationDescriptor(
            type="snakeCase",
            description="Convert field names to snake_case",
            example_config={"deep": True},
        ),
        TransformationDescriptor(
            type="camelCase",
            description="Convert field names to CamelCase",
            example_config={"deep": True},
        ),
    ]


TRANSFORMATION_CATALOG = TransformationCatalog.v1()
