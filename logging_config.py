"""
Configuración de logging de la calculadora.
"""
import logging
import os
from typing import Optional


LOG_LEVEL_ENV = "CALCULADORA_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    name = level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL
    lvl = getattr(logging, name.upper(), logging.WARNING)
    logging.basicConfig(
        level=lvl,
        format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
    )
