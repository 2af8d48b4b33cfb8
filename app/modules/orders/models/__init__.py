# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/__init__.py

Modelos de dominio del módulo Orders.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .order_models import (
    CheckoutSession,
    CustomerContact,
    LineItem,
    OrderRecord,
    PaymentEvent,
    ProductStock,
    ShippingAddress,
    StockAdjustment,
    inventory_updated,
)

__all__ = [
    "CheckoutSession",
    "CustomerContact",
    "LineItem",
    "OrderRecord",
    "PaymentEvent",
    "ProductStock",
    "ShippingAddress",
    "StockAdjustment",
    "inventory_updated",
]

# Fin del archivo backend/app/modules/orders/models/__init__.py
