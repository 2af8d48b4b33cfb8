# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/reconciliation.py

Disparo HTTP de la reconciliación (cron externo).

Endpoint:
- GET /api/check-orders   Authorization: Bearer <CRON_SECRET>

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import Response

from app.modules.orders.dependencies import OrderServices, get_order_services
from app.modules.orders.schemas import ErrorResponse, ReconciliationSummary
from app.shared.internal_auth import verify_bearer_token
from app.shared.utils.json_response import error_response, json_response_utf8

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders:reconciliation"])


async def require_cron_secret(
    authorization: Annotated[Optional[str], Header()] = None,
    services: OrderServices = Depends(get_order_services),
) -> bool:
    verify_bearer_token(authorization, services.cron_secret)
    return True


CronAuth = Annotated[bool, Depends(require_cron_secret)]


@router.get(
    "/check-orders",
    response_model=ReconciliationSummary,
    responses={401: {}, 500: {"model": ErrorResponse}},
)
async def check_orders(
    _auth: CronAuth,
    services: OrderServices = Depends(get_order_services),
) -> Response:
    try:
        result = await services.reconciliation.run()
    except Exception as e:
        logger.exception("reconciliation_failed")
        return error_response(str(e), status_code=500)

    return json_response_utf8(result.to_dict())


__all__ = ["router", "require_cron_secret"]

# Fin del archivo backend/app/modules/orders/routes/reconciliation.py
