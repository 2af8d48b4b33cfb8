# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/jobs/__init__.py

Jobs programados del sistema.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .order_reconciliation_job import (
    register_order_reconciliation_job,
    run_order_reconciliation,
)

__all__ = [
    "register_order_reconciliation_job",
    "run_order_reconciliation",
]
