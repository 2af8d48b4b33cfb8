# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/checkout/validators.py

Validadores de negocio del carrito contra el catálogo vivo.

El primer error encontrado se reporta nombrando el producto; no se crea
ninguna sesión de pago si alguna línea es inválida.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence

from app.modules.orders.errors import CheckoutValidationError
from app.modules.orders.models import ProductStock
from app.modules.orders.schemas import CheckoutItemIn


def validate_cart_not_empty(items: Sequence[CheckoutItemIn]) -> None:
    if not items:
        raise CheckoutValidationError("La cesta está vacía")


def validate_product_ref(item: CheckoutItemIn) -> None:
    if not item.product_id:
        raise CheckoutValidationError("productId is required")


def validate_quantity(item: CheckoutItemIn) -> None:
    if item.quantity < 1:
        raise CheckoutValidationError(
            f"Cantidad inválida para el producto {item.product_id}",
            product_id=item.product_id,
        )


def validate_line(item: CheckoutItemIn, product: ProductStock) -> None:
    """Producto activo y con stock suficiente para la cantidad pedida."""
    if not product.is_active:
        raise CheckoutValidationError(
            f"「{product.name}」 no está a la venta en este momento",
            product_id=product.product_id,
        )
    if product.stock < item.quantity:
        raise CheckoutValidationError(
            f"「{product.name}」 no tiene stock suficiente (disponible: {product.stock})",
            product_id=product.product_id,
        )


__all__ = [
    "validate_cart_not_empty",
    "validate_product_ref",
    "validate_quantity",
    "validate_line",
]

# Fin del archivo backend/app/modules/orders/facades/checkout/validators.py
