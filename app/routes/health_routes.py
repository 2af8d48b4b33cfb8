# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Health check del backend de checkout.

No llama a los sistemas externos (Stripe, microCMS, Sheets, Slack): solo
reporta qué integraciones están configuradas, para no gastar cuota de API
en cada sondeo del balanceador.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app import __version__

router = APIRouter()


@router.get("/health", summary="Health check del backend")
async def health_check(request: Request) -> dict:
    settings = getattr(request.app.state, "settings", None)
    services = getattr(request.app.state, "order_services", None)
    scheduler = getattr(request.app.state, "scheduler", None)

    integrations = {}
    if services is not None:
        integrations = {
            "stripe": services.gateway.is_configured,
            "slack": services.notifier.enabled,
            "catalog": bool(services.catalog.service_domain),
            "ledger": bool(services.ledger.spreadsheet_id),
        }

    return {
        "status": "ok" if services is not None else "starting",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": getattr(settings, "python_env", None),
        "integrations": integrations,
        "scheduler": {"running": bool(scheduler and scheduler.is_running)},
        "service": {"name": "tienda-checkout-backend", "version": __version__},
    }

# Fin del archivo backend/app/routes/health_routes.py
