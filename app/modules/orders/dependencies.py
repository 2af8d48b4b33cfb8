# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/dependencies.py

Contenedor de servicios del módulo Orders.

Se construye UNA vez en el lifespan de la app a partir del settings y se
guarda en app.state.order_services. Las rutas lo obtienen con
Depends(get_order_services); los tests lo sustituyen vía
app.dependency_overrides.

Un único httpx.AsyncClient compartido (timeouts desde HTTP_TIMEOUT_SECONDS)
se inyecta en los adaptadores y se cierra en el shutdown.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from app.modules.orders.adapters import (
    GoogleSheetsLedger,
    MicroCMSCatalog,
    ServiceAccountTokenProvider,
    SlackNotifier,
    StripeGateway,
)
from app.modules.orders.facades.checkout import CheckoutOptions
from app.modules.orders.facades.fulfillment import FulfillmentWorkflow
from app.modules.orders.facades.reconciliation import ReconciliationJob
from app.modules.orders.services import StockService
from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


def _secret(value) -> Optional[str]:
    """SecretStr | str | None -> str | None."""
    if value is None:
        return None
    if hasattr(value, "get_secret_value"):
        return value.get_secret_value()
    return str(value)


@dataclass
class OrderServices:
    http_client: httpx.AsyncClient
    notifier: SlackNotifier
    catalog: MicroCMSCatalog
    ledger: GoogleSheetsLedger
    gateway: StripeGateway
    stock_service: StockService
    workflow: FulfillmentWorkflow
    reconciliation: ReconciliationJob
    checkout_options: CheckoutOptions
    cron_secret: Optional[str] = None

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_order_services(
    settings: BaseAppSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> OrderServices:
    client = http_client or httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
    )

    notifier = SlackNotifier(_secret(settings.slack_webhook_url), client)
    catalog = MicroCMSCatalog(
        settings.microcms_service_domain,
        _secret(settings.microcms_api_key),
        client,
        endpoint=settings.microcms_endpoint,
    )
    tokens = ServiceAccountTokenProvider(
        settings.google_service_account_email,
        _secret(settings.google_private_key),
        timeout_seconds=settings.http_timeout_seconds,
    )
    ledger = GoogleSheetsLedger(
        settings.google_spreadsheet_id,
        tokens,
        client,
        range_a1=settings.ledger_range,
        schema_version=settings.ledger_schema_version,
    )
    gateway = StripeGateway(
        _secret(settings.stripe_secret_key),
        timeout_seconds=settings.provider_timeout_seconds,
    )
    stock_service = StockService(catalog, notifier)

    workflow = FulfillmentWorkflow(
        gateway=gateway,
        stock_service=stock_service,
        ledger=ledger,
        notifier=notifier,
        webhook_secret=_secret(settings.stripe_webhook_secret),
        tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
        tz_name=settings.shop_timezone,
        default_status=settings.ledger_default_status,
        dashboard_base_url=settings.stripe_dashboard_url,
    )
    reconciliation = ReconciliationJob(
        gateway=gateway,
        ledger=ledger,
        notifier=notifier,
        window_hours=settings.reconciliation_window_hours,
        page_size=settings.reconciliation_page_size,
        max_pages=settings.reconciliation_max_pages,
    )
    checkout_options = CheckoutOptions(
        currency=settings.shop_currency,
        locale=settings.checkout_locale,
        allowed_countries=tuple(settings.get_allowed_countries()),
        success_path=settings.checkout_success_path,
        cancel_path=settings.checkout_cancel_path,
        public_base_url=settings.shop_public_url,
    )

    logger.info(
        "order_services_built slack=%s ledger_schema=%s",
        notifier.enabled,
        settings.ledger_schema_version,
    )
    return OrderServices(
        http_client=client,
        notifier=notifier,
        catalog=catalog,
        ledger=ledger,
        gateway=gateway,
        stock_service=stock_service,
        workflow=workflow,
        reconciliation=reconciliation,
        checkout_options=checkout_options,
        cron_secret=_secret(settings.cron_secret),
    )


def get_order_services(request: Request) -> OrderServices:
    services = getattr(request.app.state, "order_services", None)
    if services is None:
        raise RuntimeError("order_services no inicializado (lifespan no ejecutado)")
    return services


__all__ = ["OrderServices", "build_order_services", "get_order_services"]

# Fin del archivo backend/app/modules/orders/dependencies.py
