# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/metrics/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .prometheus_exporter import (
    observe_fulfillment_outcome,
    observe_ledger_append,
    observe_reconciliation,
    observe_stock_adjustment,
    observe_webhook_received,
    observe_webhook_rejected,
)

__all__ = [
    "observe_fulfillment_outcome",
    "observe_ledger_append",
    "observe_reconciliation",
    "observe_stock_adjustment",
    "observe_webhook_received",
    "observe_webhook_rejected",
]
