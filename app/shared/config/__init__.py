# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import get_settings

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .config_loader import get_settings
from .logging_config import setup_logging
from .settings_base import BaseAppSettings, SUPPORTED_LEDGER_SCHEMAS

__all__ = [
    "BaseAppSettings",
    "SUPPORTED_LEDGER_SCHEMAS",
    "get_settings",
    "setup_logging",
]
