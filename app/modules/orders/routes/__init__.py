# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/__init__.py

Router agregado del módulo Orders, montado bajo /api.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from fastapi import APIRouter

from .checkout import router as checkout_router
from .reconciliation import router as reconciliation_router
from .webhooks_stripe import router as webhooks_router


def get_orders_routers() -> APIRouter:
    router = APIRouter(prefix="/api")
    router.include_router(webhooks_router)
    router.include_router(checkout_router)
    router.include_router(reconciliation_router)
    return router


__all__ = ["get_orders_routers"]
