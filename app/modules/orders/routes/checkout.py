# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/checkout.py

Endpoints públicos de compra.

- POST /api/create-checkout-session  {items:[{productId, quantity}]} → {url}
- POST /api/check-stock              {productId} → {stock, isActive}

Los errores viajan como {"error": "..."}; solo los de validación del
carrito muestran detalle al comprador.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from app.modules.orders.dependencies import OrderServices, get_order_services
from app.modules.orders.errors import CheckoutValidationError, OrderFlowError
from app.modules.orders.facades.checkout import CheckoutOptions, check_stock, start_checkout
from app.modules.orders.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    ErrorResponse,
    StockCheckRequest,
    StockCheckResponse,
)
from app.shared.utils.json_response import error_response, json_response_utf8

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders:checkout"])


def checkout_base_url(request: Request, options: CheckoutOptions) -> str:
    """
    Base de las URLs success/cancel.

    SHOP_PUBLIC_URL si está configurada; si no, la URL base del propio
    servicio. El header Origin nunca se usa: lo controla el cliente.
    """
    if options.public_base_url:
        return options.public_base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


@router.post(
    "/create-checkout-session",
    response_model=CheckoutResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    payload: CheckoutRequest,
    request: Request,
    services: OrderServices = Depends(get_order_services),
) -> Response:
    try:
        url = await start_checkout(
            payload.items,
            origin=checkout_base_url(request, services.checkout_options),
            catalog=services.catalog,
            gateway=services.gateway,
            options=services.checkout_options,
        )
    except CheckoutValidationError as e:
        logger.info("checkout_rejected product_id=%s reason=%s", e.product_id, e.message)
        return error_response(e.message, status_code=400)
    except OrderFlowError as e:
        logger.error("checkout_session_error error=%s", e)
        return error_response("No se pudo crear la sesión de pago", status_code=500)

    return json_response_utf8(CheckoutResponse(url=url).model_dump())


@router.post(
    "/check-stock",
    response_model=StockCheckResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_stock_route(
    payload: StockCheckRequest,
    services: OrderServices = Depends(get_order_services),
) -> Response:
    if not payload.product_id:
        return error_response("productId is required", status_code=400)

    try:
        product = await check_stock(payload.product_id, catalog=services.catalog)
    except OrderFlowError as e:
        logger.error("check_stock_error product_id=%s error=%s", payload.product_id, e)
        return error_response("No se pudo obtener la información del producto", status_code=500)

    body = StockCheckResponse(stock=product.stock, is_active=product.is_active)
    return json_response_utf8(body.model_dump(by_alias=True))


__all__ = ["router"]

# Fin del archivo backend/app/modules/orders/routes/checkout.py
