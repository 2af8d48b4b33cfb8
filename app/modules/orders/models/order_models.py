# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/order_models.py

Modelos de dominio del flujo de pedidos (dataclasses, sin ORM).

- PaymentEvent: notificación verificada del proveedor (no se persiste)
- CheckoutSession: registro autoritativo del proveedor para un checkout
- LineItem: producto comprado dentro de la sesión
- OrderRecord: fila durable del ledger (una por order_id)
- ProductStock: vista del producto en el catálogo
- StockAdjustment: resultado por línea del ajuste de inventario

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.modules.orders.enums import StockOutcome


@dataclass(frozen=True)
class PaymentEvent:
    """Evento de webhook ya verificado por firma."""

    event_id: str
    event_type: str
    session_id: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PaymentEvent":
        obj = (payload.get("data") or {}).get("object") or {}
        return cls(
            event_id=str(payload.get("id") or ""),
            event_type=str(payload.get("type") or ""),
            session_id=obj.get("id"),
            raw=payload,
        )


@dataclass(frozen=True)
class LineItem:
    """Línea comprada. product_id vacío si el proveedor perdió el vínculo al catálogo."""

    product_id: str
    name: str
    unit_price: int
    quantity: int

    @property
    def has_product_ref(self) -> bool:
        return bool(self.product_id)

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CustomerContact:
    email: str = ""
    name: str = ""
    phone: str = ""


@dataclass(frozen=True)
class ShippingAddress:
    name: str = ""
    postal_code: str = ""
    state: str = ""
    city: str = ""
    line1: str = ""
    line2: str = ""

    @property
    def one_line(self) -> str:
        """Formato de dirección japonés: prefectura + ciudad + líneas, sin separadores."""
        return f"{self.state}{self.city}{self.line1}{self.line2}"


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    payment_intent_id: Optional[str]
    amount_total: int
    currency: str
    created: int
    customer: CustomerContact = field(default_factory=CustomerContact)
    shipping: Optional[ShippingAddress] = None
    line_items: List[LineItem] = field(default_factory=list)
    status: Optional[str] = None
    url: Optional[str] = None

    @property
    def order_id(self) -> str:
        """Clave de idempotencia del ledger. Sin payment_intent (p.ej. total 0) se usa la sesión."""
        return self.payment_intent_id or self.session_id


@dataclass(frozen=True)
class ProductStock:
    product_id: str
    name: str
    price: int
    stock: int
    is_active: bool
    description: str = ""
    image_url: Optional[str] = None


@dataclass(frozen=True)
class StockAdjustment:
    product_id: str
    name: str
    quantity: int
    outcome: StockOutcome
    previous_stock: Optional[int] = None
    new_stock: Optional[int] = None
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.outcome == StockOutcome.ERROR


def inventory_updated(adjustments: List[StockAdjustment]) -> bool:
    """True solo si ningún ajuste de la corrida falló (SKIPPED no cuenta como fallo)."""
    return not any(a.failed for a in adjustments)


@dataclass
class OrderRecord:
    order_id: str
    created_at: str
    items: List[LineItem]
    total_amount: int
    customer_email: str = ""
    postal_code: str = ""
    shipping_address: str = ""
    customer_name: str = ""
    phone: str = ""
    status: str = ""
    inventory_updated: bool = True
    notes: str = ""
    dashboard_url: str = ""


__all__ = [
    "PaymentEvent",
    "LineItem",
    "CustomerContact",
    "ShippingAddress",
    "CheckoutSession",
    "ProductStock",
    "StockAdjustment",
    "OrderRecord",
    "inventory_updated",
]

# Fin del archivo backend/app/modules/orders/models/order_models.py
