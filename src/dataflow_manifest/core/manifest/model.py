"""
Modelo canônico do manifest DataFlow (v1).

Estrutura (ordem de chaves fixa, usada pelo serializer):

    apiVersion: dataflow.dataflow.io/v1
    kind: DataFlow
    metadata:
      name: <nome>
      namespace: <opcional>
    spec:
      source: {type, config}
      sink: {type, config}
      transformations: [{type, config}, ...]   # omitido quando vazio

As chaves do schema seguem a ordem acima; o conteúdo de cada `config` é
emitido com chaves ordenadas, então manifests iguais geram o mesmo dict.

`from_dict` é tolerante: aceita manifests semanticamente inválidos
(tipos vazios, apiVersion divergente) e só rejeita estruturas que não
podem ser navegadas. Validar invariantes é papel do validator.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import ManifestParseError

DATAFLOW_API_VERSION = "dataflow.dataflow.io/v1"
DATAFLOW_KIND = "DataFlow"


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _mapping(value: Any, path: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestParseError(
            message=f"parse error: {path} must be a mapping",
            details={"path": path, "received": type(value).__name__},
        )
    return value


def _canonical(value: Any) -> Any:
    """Cópia profunda com chaves de mapeamentos em ordem ordenada (recursivo)."""
    if isinstance(value, dict):
        return {k: _canonical(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, list):
        return [_canonical(v) for v in value]
    return deepcopy(value)


@dataclass(frozen=True)
class Endpoint:
    """Lado source ou sink do manifest."""

    type: str
    config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "config": _canonical(self.config)}

    @classmethod
    def from_dict(cls, data: Any, path: str) -> "Endpoint":
        data = _mapping(data, path)
        return cls(
            type=_as_str(data.get("type")),
            config=deepcopy(_mapping(data.get("config"), f"{path}.config")),
        )


@dataclass(frozen=True)
class TransformationStep:
    """Etapa opcional aplicada entre source e sink."""

    type: str
    config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "config": _canonical(self.config)}


@dataclass(frozen=True)
class Manifest:
    """Manifest DataFlow: entidade central gerada, validada e migrada."""

    name: str
    source: Endpoint
    sink: Endpoint
    transformations: List[TransformationStep] = field(default_factory=list)
    namespace: Optional[str] = None
    api_version: str = DATAFLOW_API_VERSION
    kind: str = DATAFLOW_KIND

    def to_dict(self) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {"name": self.name}
        if self.namespace is not None:
            metadata["namespace"] = self.namespace

        spec: Dict[str, Any] = {
            "source": self.source.to_dict(),
            "sink": self.sink.to_dict(),
        }
        if self.transformations:
            spec["transformations"] = [t.to_dict() for t in self.transformations]

        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": spec,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        """Materializa um Manifest a partir de dados já parseados.

        Raises:
            ManifestParseError: se alguma seção não for navegável
                (ex.: `spec` como lista, `config` como string).
        """
        data = _mapping(data, "manifest root")
        metadata = _mapping(data.get("metadata"), "metadata")
        spec = _mapping(data.get("spec"), "spec")

        raw_steps = spec.get("transformations")
        if raw_steps is None:
            raw_steps = []
        if not isinstance(raw_steps, list):
            raise ManifestParseError(
                message="parse error: spec.transformations must be a list",
                details={"path": "spec.transformations", "received": type(raw_steps).__name__},
            )

        steps: List[TransformationStep] = []
        for i, raw in enumerate(raw_steps):
            path = f"spec.transformations[{i}]"
            raw = _mapping(raw, path)
            steps.append(
                TransformationStep(
                    type=_as_str(raw.get("type")),
                    config=deepcopy(_mapping(raw.get("config"), f"{path}.config")),
                )
            )

        namespace = metadata.get("namespace")
        return cls(
            name=_as_str(metadata.get("name")),
            source=Endpoint.from_dict(spec.get("source"), "spec.source"),
            sink=Endpoint.from_dict(spec.get("sink"), "spec.sink"),
            transformations=steps,
            namespace=None if namespace is None else _as_str(namespace),
            api_version=_as_str(data.get("apiVersion")),
            kind=_as_str(data.get("kind")),
        )
