# src/dataflow_manifest/core/config/__init__.py

"""
Camada de settings do DataFlow Manifest.

Este pacote carrega, mescla e valida os settings de serviço: indentação e
cabeçalho do texto do manifest, tipo placeholder usado pela migração e
parâmetros de logging.

Invariantes:
    - Os settings finais são um objeto imutável (`Settings`)
    - Conflitos estruturais são tratados como erro
    - A mesma entrada sempre produz os mesmos settings

Limites explícitos:
    - Não valida manifests
    - Não conhece catálogos nem tabelas de migração
"""

from .errors import (  # noqa: F401
    InvalidSettingsRootTypeError,
    InvalidSettingsValueError,
    SettingsError,
    SettingsFileNotFoundError,
    SettingsTypeConflictError,
    UnsupportedSettingsFormatError,
)
from .loader import ENV_CONFIG_PATH, default_settings, load_settings  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import Settings  # noqa: F401
