# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades comunes.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .json_response import UTF8JSONResponse, error_response, json_response_utf8
from .keyed_lock import KeyedLock

__all__ = [
    "KeyedLock",
    "UTF8JSONResponse",
    "error_response",
    "json_response_utf8",
]
