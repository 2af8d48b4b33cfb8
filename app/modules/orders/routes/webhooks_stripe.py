# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/webhooks_stripe.py

Webhook de Stripe para pagos completados.

Endpoint:
- POST /api/webhook

Respuestas:
- 200 {"received": true}: procesado, ignorado o duplicado
- 400 texto: "No signature" / "Invalid signature" / "Invalid payload"
- 500 texto: "Processing error" (Stripe reintentará la entrega)

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response

from app.modules.orders.dependencies import OrderServices, get_order_services
from app.shared.utils.json_response import json_response_utf8

router = APIRouter(tags=["orders:webhooks"])


@router.post("/webhook", status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    services: OrderServices = Depends(get_order_services),
) -> Response:
    """
    El body se lee crudo: la firma se calcula sobre los bytes exactos.
    """
    raw_body = await request.body()
    result = await services.workflow.run(raw_body, dict(request.headers))

    if isinstance(result.body, str):
        return PlainTextResponse(result.body, status_code=result.status_code)
    return json_response_utf8(result.body, status_code=result.status_code)


__all__ = ["router"]

# Fin del archivo backend/app/modules/orders/routes/webhooks_stripe.py
