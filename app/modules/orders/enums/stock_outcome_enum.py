# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/stock_outcome_enum.py

Resultado del ajuste de stock de una línea del pedido.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from enum import StrEnum


class StockOutcome(StrEnum):
    """OK / ERROR por producto; SKIPPED si la línea no tiene referencia al catálogo."""

    OK = "ok"
    ERROR = "error"
    SKIPPED = "skipped"


__all__ = ["StockOutcome"]

# Fin del archivo backend/app/modules/orders/enums/stock_outcome_enum.py
