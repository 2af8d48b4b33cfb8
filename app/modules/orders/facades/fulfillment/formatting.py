# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/fulfillment/formatting.py

Mensaje de resumen del pedido para el canal de operaciones.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from app.modules.orders.models import OrderRecord


def format_order_notification(order: OrderRecord) -> str:
    items_list = "\n".join(
        f"  - {item.name} x{item.quantity} (¥{item.unit_price:,})" for item in order.items
    )
    inventory_status = "completado" if order.inventory_updated else "con fallos"

    # El total va sin separador de miles para poder buscarlo tal cual en Slack
    return "\n".join(
        [
            "🛒 ¡Nuevo pedido recibido!",
            f"ID de pedido: {order.order_id}",
            f"Cliente: {order.customer_name} ({order.customer_email})",
            f"Envío: 〒{order.postal_code} {order.shipping_address}",
            "",
            "【Contenido del pedido】",
            items_list,
            "",
            f"Total: ¥{order.total_amount}",
            f"Descuento de inventario: {inventory_status}",
            f"Fecha del pedido: {order.created_at}",
            f"Stripe: {order.dashboard_url}",
        ]
    )


__all__ = ["format_order_notification"]

# Fin del archivo backend/app/modules/orders/facades/fulfillment/formatting.py
