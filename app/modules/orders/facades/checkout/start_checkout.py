# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/checkout/start_checkout.py

Fachada de alto nivel para iniciar un checkout hospedado.

Orquesta:
- Validación del carrito (no vacío, productId presente, cantidades ≥ 1)
- Lectura de cada producto en el catálogo (activo + stock suficiente)
- Construcción de line_items con price_data y metadata microCmsId
- Creación de la sesión en el proveedor; retorna la URL de pago

El stock NO se reserva aquí: se descuenta al completarse el pago.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.modules.orders.adapters.catalog_adapter import MicroCMSCatalog
from app.modules.orders.adapters.payment_gateway_adapter import (
    PRODUCT_REF_METADATA_KEY,
    StripeGateway,
)
from app.modules.orders.models import ProductStock
from app.modules.orders.schemas import CheckoutItemIn

from .validators import (
    validate_cart_not_empty,
    validate_line,
    validate_product_ref,
    validate_quantity,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutOptions:
    currency: str = "jpy"
    locale: str = "ja"
    allowed_countries: tuple = ("JP",)
    success_path: str = "/checkout/success?session_id={CHECKOUT_SESSION_ID}"
    cancel_path: str = "/checkout/cancel"
    public_base_url: Optional[str] = None


def build_line_item(product: ProductStock, quantity: int, currency: str) -> Dict[str, Any]:
    product_data: Dict[str, Any] = {
        "name": product.name,
        "metadata": {PRODUCT_REF_METADATA_KEY: product.product_id},
    }
    if product.description:
        product_data["description"] = product.description
    if product.image_url:
        product_data["images"] = [product.image_url]

    return {
        "price_data": {
            "currency": currency,
            "product_data": product_data,
            "unit_amount": product.price,
        },
        "quantity": quantity,
    }


async def start_checkout(
    items: Sequence[CheckoutItemIn],
    *,
    origin: str,
    catalog: MicroCMSCatalog,
    gateway: StripeGateway,
    options: CheckoutOptions,
) -> str:
    """
    Valida el carrito y crea la sesión de pago.

    Raises:
        CheckoutValidationError: carrito vacío, producto inactivo o stock insuficiente
        CatalogReadError / PaymentProviderError: fallos de los sistemas externos
    """
    validate_cart_not_empty(items)

    line_items: List[Dict[str, Any]] = []
    for item in items:
        validate_product_ref(item)
        validate_quantity(item)
        product = await catalog.get_product(item.product_id)
        validate_line(item, product)
        line_items.append(build_line_item(product, item.quantity, options.currency))

    base = origin.rstrip("/")
    _, url = await gateway.create_checkout_session(
        line_items=line_items,
        success_url=f"{base}{options.success_path}",
        cancel_url=f"{base}{options.cancel_path}",
        locale=options.locale,
        allowed_countries=list(options.allowed_countries),
        metadata={"source": "web"},
    )
    logger.info("checkout_started lines=%s", len(line_items))
    return url


async def check_stock(product_id: str, *, catalog: MicroCMSCatalog) -> ProductStock:
    """Stock y estado activo de un producto (consulta directa al catálogo)."""
    return await catalog.get_product(product_id)


__all__ = ["CheckoutOptions", "build_line_item", "check_stock", "start_checkout"]

# Fin del archivo backend/app/modules/orders/facades/checkout/start_checkout.py
