# src/dataflow_manifest/core/config/merge.py
"""
Deep-merge de settings (defaults empacotados + override local).

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - Chaves não sobrescritas são preservadas
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import SettingsTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _path: str = "") -> Dict[str, Any]:
    """
    Combina `base` com `override` produzindo um novo dicionário.

    Um override de settings costuma alterar uma ou duas chaves
    (`logging.level`, `serializer.indent`); por isso o merge é recursivo
    e preserva todo o restante dos defaults.

    Args:
        base (Dict[str, Any]): Settings base (defaults empacotados).
        override (Dict[str, Any]): Override local explícito.

    Returns:
        Dict[str, Any]: Novo dicionário resultante.

    Raises:
        SettingsTypeConflictError: Se uma chave muda de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise SettingsTypeConflictError(
            f"deep-merge requires mappings at '{_path or '<root>'}', got "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        key_path = f"{_path}.{key}" if _path else str(key)

        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value, _path=key_path)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None no defaults significa "sem valor"; qualquer tipo pode ocupá-lo
        if base_value is not None and type(base_value) is not type(override_value):
            raise SettingsTypeConflictError(
                f"type conflict at '{key_path}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
