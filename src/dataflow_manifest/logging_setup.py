"""Configuração de logging do pacote.

Os módulos do core apenas obtêm loggers via `logging.getLogger(__name__)`.
Quem embute o pacote (servidor, CLI, notebook) decide se chama
`setup_logging`; importar o pacote nunca altera o logger raiz.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .core.config import Settings, default_settings

PACKAGE_LOGGER = "dataflow_manifest"


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Instala um único handler de console no logger do pacote.

    Chamadas repetidas substituem o handler anterior em vez de duplicá-lo.
    """
    settings = settings or default_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # stderr: stdout pertence ao transporte (ex.: stdio)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.log_format))
    handler.setLevel(settings.log_level_number)

    logger.setLevel(settings.log_level_number)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
