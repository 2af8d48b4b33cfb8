# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/webhooks/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .verify import (
    InvalidWebhookPayload,
    WebhookRejected,
    extract_signature_header,
    parse_event,
    verify_webhook,
)

__all__ = [
    "InvalidWebhookPayload",
    "WebhookRejected",
    "extract_signature_header",
    "parse_event",
    "verify_webhook",
]
