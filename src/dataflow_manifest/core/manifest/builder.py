"""
ManifestBuilder — construção de manifests a partir de uma requisição de geração.

Responsabilidades:
    - decodificar configs recebidas como texto (JSON ou YAML) em mapeamentos
    - copiar transformações após confirmar `type` não vazio
    - derivar `metadata.name` como `<source_type>-to-<sink_type>` quando ausente
    - apontar (sem bloquear) tipos fora do catálogo

Decisões:
    - Geração é permissiva: pertencer ao catálogo é consultivo. Tipos
      desconhecidos viram advisories, nunca erro.
    - Config de texto é tentada como JSON e depois como YAML; texto em
      branco equivale a config ausente.
    - Cada item de transformação aceita `{type, config}` ou o formato
      legado `{type: X, X: {...}}`; `config` tem precedência e demais chaves
      (ex.: `name`) são ignoradas.
    - `name`, `namespace` e `description` precisam ser texto quando informados.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml

from ..catalog import (
    CONNECTOR_CATALOG,
    TRANSFORMATION_CATALOG,
    ConnectorCatalog,
    ConnectorCategory,
    TransformationCatalog,
)
from ..exceptions import InvalidConfig, InvalidInput
from .model import Endpoint, Manifest, TransformationStep

logger = logging.getLogger(__name__)

ConfigInput = Union[Mapping[str, Any], str, None]
TransformationsInput = Union[Sequence[Any], str, None]


@dataclass(frozen=True)
class GenerationRequest:
    """Requisição de geração de manifest."""

    source_type: str
    sink_type: str
    source_config: ConfigInput = None
    sink_config: ConfigInput = None
    transformations: TransformationsInput = None
    name: Optional[str] = None
    namespace: Optional[str] = None
    description: Optional[str] = None


def _decode_text(text: str, field: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidConfig(
            message=f"{field} is not valid JSON/YAML",
            details={"field": field, "detail": str(e).strip()},
            hint="Informe a config como objeto JSON/YAML (mapeamento chave-valor).",
        ) from e


def _parse_mapping(value: Any, field: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, str):
        if not value.strip():
            return {}
        value = _decode_text(value, field)
        if value is None:
            return {}
    if not isinstance(value, Mapping):
        raise InvalidConfig(
            message=f"{field} must be a mapping",
            details={"field": field, "received": type(value).__name__},
            hint="Informe a config como objeto JSON/YAML (mapeamento chave-valor).",
        )
    return deepcopy(dict(value))


def _parse_transformations(value: TransformationsInput) -> List[TransformationStep]:
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        value = _decode_text(value, "transformations")
        if value is None:
            return []
    if isinstance(value, (Mapping, str, bytes)) or not isinstance(value, Sequence):
        raise InvalidConfig(
            message="transformations must be a list",
            details={"field": "transformations", "received": type(value).__name__},
        )

    steps: List[TransformationStep] = []
    for i, entry in enumerate(value):
        field = f"transformations[{i}]"
        if not isinstance(entry, Mapping):
            raise InvalidConfig(
                message=f"{field} must be a mapping",
                details={"field": field, "received": type(entry).__name__},
            )

        step_type = entry.get("type")
        if not isinstance(step_type, str) or not step_type.strip():
            raise InvalidConfig(
                message=f"{field}.type is required",
                details={"field": f"{field}.type"},
                hint="Cada transformação precisa de `type` (ver list_dataflow_transformations).",
            )

        if "config" in entry:
            raw_config = entry["config"]
        elif step_type != "type":
            raw_config = entry.get(step_type)
        else:
            raw_config = None

        ignored = sorted(str(k) for k in set(entry) - {"type", "config", step_type})
        if ignored:
            logger.debug("%s: ignoring keys %s", field, ", ".join(ignored))
        steps.append(TransformationStep(type=step_type, config=_parse_mapping(raw_config, f"{field}.config")))
    return steps


def _require_type(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(
            message=f"{field} is required",
            details={"field": field, "received": value},
        )
    return value.strip()


def _optional_text(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInput(
            message=f"{field} must be a string",
            details={"field": field, "received": type(value).__name__},
        )
    return value.strip() or None


class ManifestBuilder:
    """Constrói manifests e produz advisories de catálogo."""

    def __init__(
        self,
        connectors: Optional[ConnectorCatalog] = None,
        transformations: Optional[TransformationCatalog] = None,
    ):
        self.connectors = connectors or CONNECTOR_CATALOG
        self.transformations = transformations or TRANSFORMATION_CATALOG

    def build(self, request: GenerationRequest) -> Manifest:
        """Constrói o manifest; não consulta o catálogo.

        Raises:
            InvalidInput: `source_type`/`sink_type` ausentes; `name`,
                `namespace` ou `description` que não são texto.
            InvalidConfig: config ou transformação que não é mapeamento.
        """
        source_type = _require_type(request.source_type, "source_type")
        sink_type = _require_type(request.sink_type, "sink_type")

        name = _optional_text(request.name, "name") or f"{source_type}-to-{sink_type}"
        namespace = _optional_text(request.namespace, "namespace")
        _optional_text(request.description, "description")

        manifest = Manifest(
            name=name,
            namespace=namespace,
            source=Endpoint(type=source_type, config=_parse_mapping(request.source_config, "source_config")),
            sink=Endpoint(type=sink_type, config=_parse_mapping(request.sink_config, "sink_config")),
            transformations=_parse_transformations(request.transformations),
        )
        logger.debug(
            "built manifest %s (%s -> %s, %d transformation(s))",
            name, source_type, sink_type, len(manifest.transformations),
        )
        return manifest

    def advisories(self, manifest: Manifest) -> List[str]:
        """Warnings para tipos fora do catálogo; nunca invalidam o manifest."""
        notes: List[str] = []
        for side, category, endpoint in (
            ("source", ConnectorCategory.SOURCE, manifest.source),
            ("sink", ConnectorCategory.SINK, manifest.sink),
        ):
            if self.connectors.lookup(endpoint.type, category) is None:
                known = ", ".join(self.connectors.types(category))
                notes.append(f"unknown {side} type '{endpoint.type}' (known: {known})")

        for i, step in enumerate(manifest.transformations):
            if self.transformations.lookup(step.type) is None:
                notes.append(f"unknown transformation type '{step.type}' at transformations[{i}]")

        for note in notes:
            logger.warning(note)
        return notes
