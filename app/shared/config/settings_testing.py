# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado y secretos dummy para que
ningún test dependa de credenciales reales.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Secretos dummy ---
    stripe_secret_key: Optional[SecretStr] = SecretStr("sk_test_dummy")
    stripe_webhook_secret: Optional[SecretStr] = SecretStr("whsec_test_dummy")
    cron_secret: Optional[SecretStr] = SecretStr("cron_test_dummy")
    microcms_service_domain: Optional[str] = "test-shop"
    microcms_api_key: Optional[SecretStr] = SecretStr("microcms_test_dummy")
    google_spreadsheet_id: Optional[str] = "sheet_test_dummy"
    google_service_account_email: Optional[str] = "ledger@test.iam.gserviceaccount.com"

    # Sin scheduler en pruebas
    reconciliation_schedule_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
