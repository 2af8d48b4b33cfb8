# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de checkout.

Ajustes clave:
- Uso de app.core.settings como fachada de configuración.
- Contenedor de servicios de Orders construido una vez en el lifespan
  (app.state.order_services) e inyectado en las rutas.
- Scheduler con job de reconciliación (solo si RECONCILIATION_SCHEDULE_ENABLED).
- Montaje de observabilidad Prometheus (/metrics) vía app.observability.prom.
- Cierre ordenado: scheduler primero, después el cliente HTTP compartido.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de construir settings
# En PROD: override=False para respetar variables del entorno de la plataforma
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.core.logging import setup_logging_from_settings
from app.core.settings import get_settings
from app.modules.orders.dependencies import build_order_services
from app.observability.prom import setup_observability
from app.shared.config.settings_base import BaseAppSettings
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.shared.scheduler import SchedulerService
from app.shared.scheduler.jobs import register_order_reconciliation_job
from app.shared.utils.json_response import UTF8JSONResponse, error_response, json_response_utf8

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings: BaseAppSettings = app.state.settings
    services = build_order_services(settings)
    app.state.order_services = services

    scheduler = SchedulerService(timezone=settings.shop_timezone)
    app.state.scheduler = scheduler
    try:
        if register_order_reconciliation_job(scheduler, services.reconciliation, settings):
            scheduler.start()
            logger.info("⏰ Scheduler iniciado con reconciliación programada (%s)", settings.reconciliation_cron)
    except ValueError as e:
        # RECONCILIATION_CRON inválida: la app arranca, el trigger HTTP sigue disponible
        logger.error("⚠️ No se pudo programar la reconciliación: %s", e)

    logger.info("🟢 Backend de checkout iniciado (env=%s).", settings.python_env)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        with anyio.CancelScope(shield=True):
            scheduler.shutdown(wait=True)
            await services.aclose()
        logger.info("🔴 Backend de checkout apagado.")


def _configure_cors(app_instance: FastAPI, settings: BaseAppSettings) -> None:
    origins = settings.get_cors_origins()
    is_wildcard_only = origins == ["*"]

    if settings.is_prod and is_wildcard_only:
        logger.warning("⚠️ CORS WILDCARD IN PRODUCTION: configure CORS_ORIGINS con el dominio de la tienda")

    # "*" con allow_credentials=True es inválido en navegadores
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=not is_wildcard_only,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )


def create_app(settings: BaseAppSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging_from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Checkout, fulfillment de pagos y reconciliación de pedidos",
        version=__version__,
        lifespan=lifespan,
        default_response_class=UTF8JSONResponse,
    )
    app.state.settings = settings

    # El orden real de ejecución de middlewares es inverso al registro:
    # CORS se registra al final para ejecutarse primero (outermost).
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(JSONExceptionMiddleware)
    setup_observability(app)
    _configure_cors(app, settings)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return json_response_utf8(
            content={"detail": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Mismo contrato {error} que el resto de /api, con 400 en vez de 422
        logger.info("request_validation_failed path=%s errors=%s", request.url.path, len(exc.errors()))
        return error_response("Invalid request body", status_code=400)

    from app.routes import router as main_router

    app.include_router(main_router)

    @app.get("/")
    async def root():
        return {"service": settings.app_name, "status": "active"}

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
    )

# Fin del archivo backend/app/main.py
