# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .checkout_schemas import (
    CheckoutItemIn,
    CheckoutRequest,
    CheckoutResponse,
    ErrorResponse,
    StockCheckRequest,
    StockCheckResponse,
)
from .webhook_schemas import ReconciliationSummary, WebhookAck

__all__ = [
    "CheckoutItemIn",
    "CheckoutRequest",
    "CheckoutResponse",
    "ErrorResponse",
    "StockCheckRequest",
    "StockCheckResponse",
    "ReconciliationSummary",
    "WebhookAck",
]
