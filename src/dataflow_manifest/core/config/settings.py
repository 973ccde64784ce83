"""Representação imutável dos settings resolvidos.

Espelha as seções de `defaults.yaml`. A validação aqui é de domínio de
valor (tipos e faixas); a estrutura do arquivo é responsabilidade do loader.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from .errors import InvalidSettingsValueError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise InvalidSettingsValueError(f"{name} must be a mapping")
    return value


def _non_empty_str(section: Dict[str, Any], key: str, path: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidSettingsValueError(f"{path} must be a non-empty string")
    return value


@dataclass(frozen=True)
class Settings:
    """Settings efetivos do serviço."""

    indent: int = 2
    header_comments: bool = True
    placeholder_type: str = "unspecified"
    fallback_name: str = "dataflow-from-connect"
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        serializer = _section(data, "serializer")
        migration = _section(data, "migration")
        log = _section(data, "logging")

        indent = serializer.get("indent", cls.indent)
        # bool é subclasse de int; `indent: true` é erro de digitação, não 1
        if isinstance(indent, bool) or not isinstance(indent, int) or not 1 <= indent <= 8:
            raise InvalidSettingsValueError("serializer.indent must be an integer between 1 and 8")

        header_comments = serializer.get("header_comments", cls.header_comments)
        if not isinstance(header_comments, bool):
            raise InvalidSettingsValueError("serializer.header_comments must be boolean")

        level = _non_empty_str(log, "level", "logging.level").upper()
        if level not in _LOG_LEVELS:
            raise InvalidSettingsValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")

        return cls(
            indent=indent,
            header_comments=header_comments,
            placeholder_type=_non_empty_str(migration, "placeholder_type", "migration.placeholder_type"),
            fallback_name=_non_empty_str(migration, "fallback_name", "migration.fallback_name"),
            log_level=level,
            log_format=_non_empty_str(log, "format", "logging.format"),
        )
