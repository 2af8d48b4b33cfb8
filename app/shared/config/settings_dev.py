# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Overrides para entorno de DESARROLLO (dev) usando Pydantic v2.

En local el frontend corre en otro puerto y Stripe está en modo test:
- CORS abierto solo a los orígenes del servidor de desarrollo
- Links del resumen de pedido al dashboard de pruebas de Stripe

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings

DEV_FRONTEND_ORIGINS = "http://localhost:4321,http://localhost:3000"


class DevSettings(BaseAppSettings):
    """Configuración para entorno de desarrollo."""

    python_env: str = "development"

    log_level: str = "DEBUG"
    log_format: str = "plain"  # legible en consola

    allowed_origins: str = Field(default=DEV_FRONTEND_ORIGINS, validation_alias="CORS_ORIGINS")
    stripe_dashboard_url: str = "https://dashboard.stripe.com/test/payments"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings", "DEV_FRONTEND_ORIGINS"]

# Fin del archivo backend/app/shared/config/settings_dev.py
