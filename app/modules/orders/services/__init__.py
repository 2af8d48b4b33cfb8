# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/__init__.py

Servicios del módulo Orders.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .stock_service import StockService
from .webhooks import verify_stripe_signature

__all__ = ["StockService", "verify_stripe_signature"]
