# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/webhooks/verify.py

Fachada de verificación de webhooks de Stripe.

- extract_signature_header: busca Stripe-Signature sin importar mayúsculas
- verify_webhook: lanza AuthenticationError con la razón del rechazo
- parse_event: decodifica el JSON ya verificado a PaymentEvent

Autor: Tienda Backend
Fecha: 2026-10-19
"""
from __future__ import annotations

import json
import logging
import time
from typing import Callable, Mapping, Optional

from app.modules.orders.errors import AuthenticationError
from app.modules.orders.models import PaymentEvent
from app.modules.orders.services.webhooks.signature_verification import (
    verify_stripe_signature,
)

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "stripe-signature"

REASON_MISSING_SIGNATURE = "missing_signature"
REASON_INVALID_SIGNATURE = "invalid_signature"


class WebhookRejected(AuthenticationError):
    """Firma ausente o inválida. `reason` alimenta métricas y el body de la respuesta."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class InvalidWebhookPayload(ValueError):
    """Body con firma válida pero que no es un evento JSON."""


def extract_signature_header(headers: Mapping[str, str]) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == SIGNATURE_HEADER:
            return value
    return None


def verify_webhook(
    raw_body: bytes,
    headers: Mapping[str, str],
    *,
    webhook_secret: Optional[str],
    tolerance_seconds: int = 300,
    clock: Callable[[], float] = time.time,
) -> None:
    signature_header = extract_signature_header(headers)
    if not signature_header:
        raise WebhookRejected(REASON_MISSING_SIGNATURE, "No signature")

    if not verify_stripe_signature(
        payload=raw_body,
        signature_header=signature_header,
        webhook_secret=webhook_secret,
        tolerance_seconds=tolerance_seconds,
        clock=clock,
    ):
        raise WebhookRejected(REASON_INVALID_SIGNATURE, "Invalid signature")


def parse_event(raw_body: bytes) -> PaymentEvent:
    try:
        payload = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidWebhookPayload(f"JSON inválido: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidWebhookPayload("el evento debe ser un objeto JSON")
    return PaymentEvent.from_payload(payload)


__all__ = [
    "InvalidWebhookPayload",
    "WebhookRejected",
    "extract_signature_header",
    "parse_event",
    "verify_webhook",
    "REASON_MISSING_SIGNATURE",
    "REASON_INVALID_SIGNATURE",
]

# Fin del archivo backend/app/modules/orders/facades/webhooks/verify.py
