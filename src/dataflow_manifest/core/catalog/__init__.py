"""DataFlow Manifest — Catálogos (core).

Listagens estáticas e somente-leitura de conectores e transformações,
consultadas pelo builder (de forma consultiva) e pelo migrador.
"""

from .connectors import (  # noqa: F401
    CONNECTOR_CATALOG,
    ConnectorCatalog,
    ConnectorCategory,
    ConnectorDescriptor,
)
from .transformations import (  # noqa: F401
    TRANSFORMATION_CATALOG,
    TransformationCatalog,
    TransformationDescriptor,
)
