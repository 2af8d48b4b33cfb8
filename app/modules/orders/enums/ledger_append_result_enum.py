# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/ledger_append_result_enum.py

Resultado de registrar un pedido en el ledger.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from enum import StrEnum


class LedgerAppendResult(StrEnum):
    APPENDED = "appended"
    FAILED = "failed"


__all__ = ["LedgerAppendResult"]

# Fin del archivo backend/app/modules/orders/enums/ledger_append_result_enum.py
