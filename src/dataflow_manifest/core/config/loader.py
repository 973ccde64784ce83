# src/dataflow_manifest/core/config/loader.py
"""
Loader canônico de settings do DataFlow Manifest.

Os settings efetivos são resolvidos a partir de:
    - `defaults.yaml`, empacotado junto a este módulo (obrigatório)
    - um arquivo local de override (opcional), informado por parâmetro
      ou pela variável de ambiente `DATAFLOW_MANIFEST_CONFIG`

Responsabilidades do módulo:
    - Carregar arquivos de settings em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver os settings finais via deep-merge determinístico
    - Materializar o resultado em `Settings` (imutável)

Princípios fundamentais:
    - Overrides são sempre explícitos
    - Um override indicado e inexistente é erro, nunca é ignorado
    - A mesma entrada sempre produz os mesmos settings

Limites explícitos:
    - Não valida manifests nem requisições
    - Não configura logging (ver `dataflow_manifest.logging_setup`)
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .errors import (
    InvalidSettingsRootTypeError,
    SettingsFileNotFoundError,
    UnsupportedSettingsFormatError,
)
from .merge import deep_merge
from .settings import Settings

ENV_CONFIG_PATH = "DATAFLOW_MANIFEST_CONFIG"
DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Decisões arquiteturais:
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário (`dict`)

    Args:
        path (Path): Caminho para o arquivo de settings.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        SettingsFileNotFoundError: Se o arquivo não existir.
        UnsupportedSettingsFormatError: Se o formato do arquivo não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsFileNotFoundError(f"settings file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedSettingsFormatError(f"unsupported settings format: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidSettingsRootTypeError(
            f"settings root must be a mapping, got: {type(data).__name__}"
        )

    return data


def load_settings(
    *,
    local_path: Optional[str] = None,
    defaults_path: Optional[str] = None,
) -> Settings:
    """
    Carrega e resolve os settings efetivos.

    Política de resolução:
        - `defaults_path` ausente → `defaults.yaml` empacotado
        - `local_path` ausente → valor de `DATAFLOW_MANIFEST_CONFIG`, se definido
        - Quando presente, o override local sempre tem prioridade

    Args:
        local_path (Optional[str]): Caminho opcional para override local.
        defaults_path (Optional[str]): Caminho alternativo para os defaults.

    Returns:
        Settings: Settings finais, imutáveis.

    Raises:
        SettingsFileNotFoundError: Se algum arquivo indicado não existir.
        UnsupportedSettingsFormatError: Se o formato do arquivo não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo não for um dicionário.
        SettingsTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidSettingsValueError: Se algum valor final estiver fora do domínio.
    """
    defaults = _load_file(Path(defaults_path) if defaults_path else DEFAULTS_PATH)

    if local_path is None:
        local_path = os.environ.get(ENV_CONFIG_PATH) or None

    effective = defaults
    if local_path is not None:
        effective = deep_merge(defaults, _load_file(Path(local_path)))

    return Settings.from_dict(effective)


@lru_cache(maxsize=1)
def default_settings() -> Settings:
    """Settings do processo, resolvidos uma única vez na primeira chamada."""
    return load_settings()
