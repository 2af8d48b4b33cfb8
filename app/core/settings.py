# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración del backend de checkout.
Reexpone la carga de settings basada en Pydantic v2 definida en
`app.shared.config` para ofrecer un punto de entrada estable.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV).

    Solo debe llamarse en el arranque (lifespan) o en el scheduler; los
    componentes reciben la instancia por constructor.
    """
    return _get_settings()


def reset_settings_cache() -> None:
    """Invalida el singleton (útil en tests que cambian variables de entorno)."""
    _get_settings.cache_clear()

# Fin del archivo backend/app/core/settings.py
