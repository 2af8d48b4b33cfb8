# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la clase de settings según PYTHON_ENV.

La instancia se construye una sola vez (lru_cache) y pasa por
_security_checks antes de entregarse: en producción un secreto faltante
impide el arranque.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import os
from functools import lru_cache
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "development": DevSettings,
    "test": EnvTestingSettings,
    "production": ProdSettings,
}


def current_env_name() -> str:
    """PYTHON_ENV normalizado; valores desconocidos caen en development."""
    raw = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
    return raw if raw in SETTINGS_BY_ENV else "development"


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: si las validaciones de seguridad fallan
    """
    settings = SETTINGS_BY_ENV[current_env_name()]()
    settings._security_checks()
    return settings


__all__ = ["SETTINGS_BY_ENV", "current_env_name", "get_settings"]

# Fin del archivo backend/app/shared/config/config_loader.py
