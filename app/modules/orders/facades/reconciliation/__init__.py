# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/reconciliation/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .core import ReconciliationJob, ReconciliationResult
from .report import format_mismatch_report

__all__ = ["ReconciliationJob", "ReconciliationResult", "format_mismatch_report"]
