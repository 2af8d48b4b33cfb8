# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/__init__.py

Superficie de exportación de enums del módulo Orders.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .fulfillment_state_enum import FulfillmentState
from .ledger_append_result_enum import LedgerAppendResult
from .stock_outcome_enum import StockOutcome

__all__ = [
    "FulfillmentState",
    "LedgerAppendResult",
    "StockOutcome",
]

# Fin del archivo backend/app/modules/orders/enums/__init__.py
