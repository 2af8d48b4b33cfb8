# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) del backend de checkout.
- Esta clase NO instancia singletons; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.
- La instancia se construye UNA vez al arranque y se inyecta en cada
  componente (adapters, servicios, workflow). Ningún componente lee
  os.environ por su cuenta.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from typing import Literal, Optional

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]

# Versiones de esquema del ledger registradas (ver adapters/ledger_schema.py)
SUPPORTED_LEDGER_SCHEMAS = ("v1",)


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="Tienda Checkout", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Stripe (proveedor de pagos)
    # =========================
    stripe_secret_key: Optional[SecretStr] = Field(default=None, validation_alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[SecretStr] = Field(default=None, validation_alias="STRIPE_WEBHOOK_SECRET")
    stripe_webhook_tolerance_seconds: int = Field(default=300, validation_alias="STRIPE_WEBHOOK_TOLERANCE_SECONDS")
    stripe_dashboard_url: str = Field(
        default="https://dashboard.stripe.com/payments",
        validation_alias="STRIPE_DASHBOARD_URL",
    )
    provider_timeout_seconds: float = Field(default=20.0, validation_alias="PROVIDER_TIMEOUT_SECONDS")

    # =========================
    # Checkout
    # =========================
    shop_currency: str = Field(default="jpy", validation_alias="SHOP_CURRENCY")
    shop_timezone: str = Field(default="Asia/Tokyo", validation_alias="SHOP_TIMEZONE")
    checkout_locale: str = Field(default="ja", validation_alias="CHECKOUT_LOCALE")
    checkout_allowed_countries: str = Field(default="JP", validation_alias="CHECKOUT_ALLOWED_COUNTRIES")
    checkout_success_path: str = Field(
        default="/checkout/success?session_id={CHECKOUT_SESSION_ID}",
        validation_alias="CHECKOUT_SUCCESS_PATH",
    )
    checkout_cancel_path: str = Field(default="/checkout/cancel", validation_alias="CHECKOUT_CANCEL_PATH")
    # URL pública de la tienda para success/cancel; sin valor se usa la URL base del request
    shop_public_url: Optional[str] = Field(default=None, validation_alias="SHOP_PUBLIC_URL")

    # =========================
    # Catálogo (microCMS)
    # =========================
    microcms_service_domain: Optional[str] = Field(default=None, validation_alias="MICROCMS_SERVICE_DOMAIN")
    microcms_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MICROCMS_API_KEY")
    microcms_endpoint: str = Field(default="products", validation_alias="MICROCMS_ENDPOINT")

    # =========================
    # Ledger (Google Sheets)
    # =========================
    google_spreadsheet_id: Optional[str] = Field(default=None, validation_alias="GOOGLE_SPREADSHEET_ID")
    google_service_account_email: Optional[str] = Field(default=None, validation_alias="GOOGLE_SERVICE_ACCOUNT_EMAIL")
    google_private_key: Optional[SecretStr] = Field(default=None, validation_alias="GOOGLE_PRIVATE_KEY")
    ledger_sheet_name: str = Field(default="注文一覧", validation_alias="LEDGER_SHEET_NAME")
    ledger_schema_version: str = Field(default="v1", validation_alias="LEDGER_SCHEMA_VERSION")
    ledger_default_status: str = Field(default="未発送", validation_alias="LEDGER_DEFAULT_STATUS")

    # =========================
    # Notificaciones (Slack)
    # =========================
    slack_webhook_url: Optional[SecretStr] = Field(default=None, validation_alias="SLACK_WEBHOOK_URL")

    # =========================
    # Reconciliación
    # =========================
    cron_secret: Optional[SecretStr] = Field(default=None, validation_alias="CRON_SECRET")
    reconciliation_window_hours: int = Field(default=24, validation_alias="RECONCILIATION_WINDOW_HOURS")
    reconciliation_page_size: int = Field(default=100, validation_alias="RECONCILIATION_PAGE_SIZE")
    reconciliation_max_pages: int = Field(default=10, validation_alias="RECONCILIATION_MAX_PAGES")
    reconciliation_schedule_enabled: bool = Field(default=False, validation_alias="RECONCILIATION_SCHEDULE_ENABLED")
    reconciliation_cron: str = Field(default="0 * * * *", validation_alias="RECONCILIATION_CRON")

    # =========================
    # HTTP saliente
    # =========================
    http_timeout_seconds: float = Field(default=10.0, validation_alias="HTTP_TIMEOUT_SECONDS")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    # ===== Normalizadores =====
    @field_validator("google_private_key", mode="before")
    @classmethod
    def _normalize_private_key(cls, v):
        """Las plataformas de despliegue suelen guardar la llave con '\\n' literales."""
        if isinstance(v, str):
            return v.replace("\\n", "\n")
        return v

    @field_validator("ledger_schema_version")
    @classmethod
    def _check_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_LEDGER_SCHEMAS:
            raise ValueError(
                f"LEDGER_SCHEMA_VERSION={v!r} no soportada. Opciones: {', '.join(SUPPORTED_LEDGER_SCHEMAS)}"
            )
        return v

    @field_validator("shop_currency")
    @classmethod
    def _lower_currency(cls, v: str) -> str:
        return v.strip().lower()

    # ===== Utilidades =====
    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def get_allowed_countries(self) -> list[str]:
        return [c.strip().upper() for c in self.checkout_allowed_countries.split(",") if c.strip()]

    @property
    def ledger_range(self) -> str:
        """Rango A1 de la hoja de pedidos (15 columnas, A:O)."""
        return f"{self.ledger_sheet_name}!A:O"

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de seguridad y coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        required = {
            "STRIPE_SECRET_KEY": self.stripe_secret_key,
            "STRIPE_WEBHOOK_SECRET": self.stripe_webhook_secret,
            "CRON_SECRET": self.cron_secret,
            "MICROCMS_SERVICE_DOMAIN": self.microcms_service_domain,
            "MICROCMS_API_KEY": self.microcms_api_key,
            "GOOGLE_SPREADSHEET_ID": self.google_spreadsheet_id,
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": self.google_service_account_email,
            "GOOGLE_PRIVATE_KEY": self.google_private_key,
        }
        missing = [name for name, value in required.items() if not value]

        if self.is_prod and missing:
            raise ValueError(f"Variables requeridas en producción: {', '.join(missing)}")

        if self.is_dev and missing:
            logger.info("ℹ️ Variables sin configurar en desarrollo: %s", ", ".join(missing))

        # Slack es opcional incluso en producción: sin URL, las notificaciones son no-op
        if not self.slack_webhook_url:
            logger.warning("SLACK_WEBHOOK_URL no configurado: las notificaciones se omitirán")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "SUPPORTED_LEDGER_SCHEMAS"]
# Fin del archivo backend/app/shared/config/settings_base.py
