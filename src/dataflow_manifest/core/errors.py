"""
DataFlow Manifest — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros devolvidos ao chamador.
Erros fazem parte do contrato operacional das operações e devem ser:

- explícitos
- serializáveis
- acionáveis

Nenhuma condição é silenciosa: toda falha vira payload estruturado.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    AmbiguousConnectorRoles,
    DataflowException,
    InvalidConfig,
    InvalidInput,
    ManifestParseError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DataflowErrorPayload:
    """
    Payload canônico de erro do DataFlow Manifest.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao chamador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

INVALID_INPUT = "INVALID_INPUT"
INVALID_CONFIG = "INVALID_CONFIG"
MANIFEST_PARSE_ERROR = "MANIFEST_PARSE_ERROR"
AMBIGUOUS_CONNECTOR_ROLES = "AMBIGUOUS_CONNECTOR_ROLES"

_TYPE_BY_EXCEPTION = {
    InvalidInput: INVALID_INPUT,
    InvalidConfig: INVALID_CONFIG,
    ManifestParseError: MANIFEST_PARSE_ERROR,
    AmbiguousConnectorRoles: AMBIGUOUS_CONNECTOR_ROLES,
}


# ---------------------------------------------------------------------------
# Mapeamento exceção -> payload
# ---------------------------------------------------------------------------

def error_payload_from_exception(exc: DataflowException) -> DataflowErrorPayload:
    """Mapeia deterministicamente uma exceção tipada para o payload canônico.

    O código estável é resolvido pela classe mais específica da exceção;
    exceções fora do catálogo caem no código de `InvalidInput`.
    """
    error_type = INVALID_INPUT
    for klass in type(exc).__mro__:
        if klass in _TYPE_BY_EXCEPTION:
            error_type = _TYPE_BY_EXCEPTION[klass]
            break

    return DataflowErrorPayload(
        type=error_type,
        message=exc.message,
        details=dict(exc.details),
        hint=exc.hint,
    )
