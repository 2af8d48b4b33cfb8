# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/fulfillment/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .extract import build_order_record, format_created_at
from .formatting import format_order_notification
from .workflow import CHECKOUT_COMPLETED, FulfillmentResult, FulfillmentWorkflow

__all__ = [
    "CHECKOUT_COMPLETED",
    "FulfillmentResult",
    "FulfillmentWorkflow",
    "build_order_record",
    "format_created_at",
    "format_order_notification",
]
