# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN usando Pydantic v2.

- Solo variables de entorno / secret store de la plataforma (sin .env)
- Logging INFO en JSON
- _security_checks exige todos los secretos y además rechaza llaves de
  Stripe en modo test: un checkout real nunca debe cobrar contra la cuenta
  de pruebas.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings

STRIPE_TEST_KEY_PREFIX = "sk_test_"


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
    )

    def _security_checks(self) -> None:
        super()._security_checks()

        secret_key = self.stripe_secret_key.get_secret_value() if self.stripe_secret_key else ""
        if secret_key.startswith(STRIPE_TEST_KEY_PREFIX):
            raise ValueError("STRIPE_SECRET_KEY de modo test no permitida en producción")


__all__ = ["ProdSettings"]

# Fin del archivo backend/app/shared/config/settings_prod.py
