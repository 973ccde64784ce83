"""DataFlow Manifest — Manifest (core).

Componentes canônicos do manifest DataFlow v1:
 - modelo de dados imutável
 - serialização YAML determinística
 - validação estrutural acumulativa
 - construção a partir de requisição de geração
"""

from .builder import GenerationRequest, ManifestBuilder  # noqa: F401
from .model import (  # noqa: F401
    DATAFLOW_API_VERSION,
    DATAFLOW_KIND,
    Endpoint,
    Manifest,
    TransformationStep,
)
from .serializer import from_text, parse_text, to_text  # noqa: F401
from .validator import (  # noqa: F401
    ValidationResult,
    validate_manifest,
    validate_manifest_data,
    validate_manifest_text,
)
