# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada de `app.shared.config.logging_config` bajo `app.core`.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from typing import Literal

from app.shared.config.logging_config import setup_logging as _setup_logging
from app.shared.config.settings_base import BaseAppSettings


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    """Configura el sistema de logging de la aplicación."""
    _setup_logging(level=level, fmt=fmt)


def setup_logging_from_settings(settings: BaseAppSettings) -> None:
    """Aplica LOG_LEVEL / LOG_FORMAT de la configuración activa."""
    _setup_logging(level=settings.log_level, fmt=settings.log_format)

# Fin del archivo backend/app/core/logging.py
