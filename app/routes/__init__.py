# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores:
- /health
- /api/* del módulo Orders

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from fastapi import APIRouter

from app.modules.orders.routes import get_orders_routers

from .health_routes import router as health_router

router = APIRouter()
router.include_router(health_router)
router.include_router(get_orders_routers())

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
