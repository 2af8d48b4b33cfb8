# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/webhook_schemas.py

Respuestas del webhook de pagos y del endpoint de reconciliación.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from pydantic import BaseModel


class WebhookAck(BaseModel):
    """Acuse para que el proveedor no reentregue el evento."""

    received: bool = True


class ReconciliationSummary(BaseModel):
    checked: int
    mismatches: int


__all__ = ["WebhookAck", "ReconciliationSummary"]

# Fin del archivo backend/app/modules/orders/schemas/webhook_schemas.py
