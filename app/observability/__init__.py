# -*- coding: utf-8 -*-
"""
backend/app/observability/__init__.py
"""

from .prom import setup_observability

__all__ = ["setup_observability"]
