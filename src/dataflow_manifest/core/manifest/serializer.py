"""Serializer canônico do manifest (YAML).

Decisões:
- A ordem de chaves é a do modelo (`sort_keys=False`), então dois manifests
  iguais produzem texto byte a byte idêntico.
- Linhas de cabeçalho opcionais são emitidas como comentários `#` e
  ignoradas no parse.
- O parse só exige um mapeamento navegável; invariantes semânticos ficam
  com o validator.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable

import yaml

from ..exceptions import ManifestParseError
from .model import Manifest


def _comment_lines(header: Iterable[str]) -> str:
    out = []
    for entry in header:
        for line in str(entry).splitlines() or [""]:
            out.append(f"# {line}".rstrip())
    return "\n".join(out) + "\n" if out else ""


def to_text(manifest: Manifest, *, header: Iterable[str] = (), indent: int = 2) -> str:
    """Serializa o manifest em YAML determinístico."""
    body = yaml.safe_dump(
        manifest.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        indent=indent,
    )
    return _comment_lines(header) + body


def parse_text(text: Any) -> Dict[str, Any]:
    """Parseia texto YAML em um mapeamento.

    Raises:
        ManifestParseError: texto não-string, YAML malformado, documento
            vazio ou raiz que não é mapeamento.
    """
    if not isinstance(text, str):
        raise ManifestParseError(
            message="parse error: manifest must be text",
            details={"received": type(text).__name__},
        )

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        detail = str(e).strip() or "invalid YAML"
        raise ManifestParseError(message=f"parse error: {detail}", details={"detail": detail}) from e

    if data is None:
        raise ManifestParseError(message="parse error: manifest is empty", details={"detail": "empty"})

    if not isinstance(data, dict):
        raise ManifestParseError(
            message="parse error: manifest root must be a mapping",
            details={"received": type(data).__name__},
        )

    return data


def from_text(text: Any) -> Manifest:
    """Parseia texto YAML e materializa o `Manifest` (sem validar invariantes)."""
    return Manifest.from_dict(parse_text(text))
