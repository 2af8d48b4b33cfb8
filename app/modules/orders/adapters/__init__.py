# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/__init__.py

Adaptadores a sistemas externos (catálogo, ledger, proveedor de pagos, chat).

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .catalog_adapter import MicroCMSCatalog
from .google_auth import GoogleAuthError, ServiceAccountTokenProvider
from .ledger_adapter import GoogleSheetsLedger
from .notifier_adapter import SlackNotifier
from .payment_gateway_adapter import StripeGateway, map_session

__all__ = [
    "GoogleAuthError",
    "GoogleSheetsLedger",
    "MicroCMSCatalog",
    "ServiceAccountTokenProvider",
    "SlackNotifier",
    "StripeGateway",
    "map_session",
]
