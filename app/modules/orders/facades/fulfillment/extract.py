# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/fulfillment/extract.py

Construcción del OrderRecord a partir de la sesión re-obtenida del proveedor.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List
from zoneinfo import ZoneInfo

from app.modules.orders.models import (
    CheckoutSession,
    OrderRecord,
    StockAdjustment,
    inventory_updated,
)


def format_created_at(epoch_seconds: int, tz_name: str = "Asia/Tokyo") -> str:
    """Formato de fecha local japonés: 2026/10/19 9:05:03 (sin ceros a la izquierda en M/D/H)."""
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).astimezone(ZoneInfo(tz_name))
    return f"{dt.year}/{dt.month}/{dt.day} {dt.hour}:{dt.minute:02d}:{dt.second:02d}"


def build_order_record(
    session: CheckoutSession,
    adjustments: List[StockAdjustment],
    *,
    tz_name: str,
    status: str,
    dashboard_base_url: str,
) -> OrderRecord:
    shipping = session.shipping
    customer = session.customer
    return OrderRecord(
        order_id=session.order_id,
        created_at=format_created_at(session.created, tz_name),
        items=list(session.line_items),
        total_amount=session.amount_total,
        customer_email=customer.email,
        postal_code=shipping.postal_code if shipping else "",
        shipping_address=shipping.one_line if shipping else "",
        customer_name=(shipping.name if shipping and shipping.name else customer.name),
        phone=customer.phone,
        status=status,
        inventory_updated=inventory_updated(adjustments),
        notes="",
        dashboard_url=f"{dashboard_base_url.rstrip('/')}/{session.order_id}",
    )


__all__ = ["build_order_record", "format_created_at"]

# Fin del archivo backend/app/modules/orders/facades/fulfillment/extract.py
