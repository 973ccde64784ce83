"""
Validação estrutural de manifests DataFlow.

Regras (v1), aplicadas em ordem e acumuladas:
    1. o texto precisa ser YAML parseável com raiz mapeamento
       (falha aqui encerra a validação com um único erro `parse error: ...`)
    2. `apiVersion` igual à constante do schema
    3. `kind` igual à constante do schema
    4. `spec.source` presente, com `type` não vazio
    5. `spec.sink` presente, com `type` não vazio
    6. `spec.transformations`, se presente, é lista e cada item tem `type`

Diferente do schema de contrato, que falha no primeiro problema, aqui
todos os problemas estruturais encontrados são devolvidos de uma vez.

Tipos fora do catálogo NÃO invalidam um manifest: catálogo é consultivo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..exceptions import ManifestParseError
from .model import DATAFLOW_API_VERSION, DATAFLOW_KIND, Manifest
from .serializer import parse_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Resultado de uma validação; `valid` é verdadeiro sse não há erros."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _check_constant(data: Dict[str, Any], key: str, expected: str, errors: List[str]) -> None:
    value = data.get(key)
    if value is None:
        errors.append(f"{key} is required (expected '{expected}')")
    elif value != expected:
        errors.append(f"{key} must be '{expected}', got '{value}'")


def _check_endpoint(spec: Dict[str, Any], side: str, errors: List[str]) -> None:
    endpoint = spec.get(side)
    if endpoint is None:
        errors.append(f"spec.{side} is required")
    elif not isinstance(endpoint, dict):
        errors.append(f"spec.{side} must be a mapping")
    elif not _is_non_empty_str(endpoint.get("type")):
        errors.append(f"spec.{side}.type is required")


def _check_transformations(spec: Dict[str, Any], errors: List[str]) -> None:
    steps = spec.get("transformations")
    if steps is None:
        return
    if not isinstance(steps, list):
        errors.append("spec.transformations must be a list")
        return
    for i, step in enumerate(steps):
        if not isinstance(step, dict):
            errors.append(f"spec.transformations[{i}] must be a mapping")
        elif not _is_non_empty_str(step.get("type")):
            errors.append(f"spec.transformations[{i}].type is required")


def validate_manifest_data(data: Dict[str, Any]) -> ValidationResult:
    """Valida um manifest já parseado (regras 2 a 6)."""
    errors: List[str] = []

    _check_constant(data, "apiVersion", DATAFLOW_API_VERSION, errors)
    _check_constant(data, "kind", DATAFLOW_KIND, errors)

    spec = data.get("spec")
    if spec is not None and not isinstance(spec, dict):
        errors.append("spec must be a mapping")
    if not isinstance(spec, dict):
        spec = {}

    _check_endpoint(spec, "source", errors)
    _check_endpoint(spec, "sink", errors)
    _check_transformations(spec, errors)

    return ValidationResult(valid=not errors, errors=errors)


def validate_manifest(manifest: Manifest) -> ValidationResult:
    """Valida um `Manifest` em memória com as mesmas regras do texto."""
    return validate_manifest_data(manifest.to_dict())


def validate_manifest_text(text: Any) -> ValidationResult:
    """Valida o texto de um manifest; erro de parse vira resultado, não exceção."""
    try:
        data = parse_text(text)
    except ManifestParseError as e:
        logger.debug("manifest rejected at parse stage: %s", e.message)
        return ValidationResult(valid=False, errors=[e.message])

    result = validate_manifest_data(data)
    if not result.valid:
        logger.debug("manifest has %d structural error(s)", len(result.errors))
    return result
