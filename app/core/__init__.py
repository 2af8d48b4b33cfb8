# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend de checkout:
- Configuración (settings)
- Logging

Esta capa envuelve la implementación existente en `app.shared.*` para
ofrecer puntos de entrada estables hacia el resto de los módulos.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .settings import get_settings, reset_settings_cache
from .logging import setup_logging, setup_logging_from_settings

__all__ = [
    "get_settings",
    "reset_settings_cache",
    "setup_logging",
    "setup_logging_from_settings",
]

# Fin del archivo backend/app/core/__init__.py
