# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/webhooks/signature_verification.py

Verificación de firmas de webhooks de Stripe (HMAC-SHA256 local).

Header: "t=<timestamp>,v1=<hex>[,v1=<hex>...][,v0=...]"
Payload firmado: "<timestamp>." + body crudo.

No hay bypass por entorno: sin secreto configurado la firma se rechaza.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import time
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def parse_signature_header(signature_header: str) -> Dict[str, List[str]]:
    elements: Dict[str, List[str]] = {}
    for item in signature_header.split(","):
        item = item.strip()
        if "=" in item:
            key, value = item.split("=", 1)
            elements.setdefault(key, []).append(value)
    return elements


def compute_signature(payload: bytes, timestamp: int, webhook_secret: str) -> str:
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    return hmac.new(
        webhook_secret.encode("utf-8"),
        msg=signed_payload,
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify_stripe_signature(
    payload: bytes,
    signature_header: Optional[str],
    webhook_secret: Optional[str],
    tolerance_seconds: int = 300,
    clock: Callable[[], float] = time.time,
) -> bool:
    """
    Verifica la firma de un webhook de Stripe.

    Args:
        payload: Body crudo del request
        signature_header: Header Stripe-Signature
        webhook_secret: Secret del webhook (whsec_...)
        tolerance_seconds: Tolerancia de timestamp (default 5 minutos)
        clock: Fuente de tiempo (inyectable en tests)

    Returns:
        True si la firma es válida, False en caso contrario
    """
    if not signature_header:
        logger.warning("Stripe webhook rechazado: falta header Stripe-Signature")
        return False

    if not webhook_secret:
        logger.error("Stripe webhook rechazado: STRIPE_WEBHOOK_SECRET no configurado.")
        return False

    elements = parse_signature_header(signature_header)
    timestamp_str = (elements.get("t") or [None])[0]
    signatures_v1 = elements.get("v1", [])

    if not timestamp_str:
        logger.warning("Stripe webhook rechazado: timestamp no encontrado en header")
        return False

    if not signatures_v1:
        logger.warning("Stripe webhook rechazado: firma v1 no encontrada en header")
        return False

    try:
        timestamp = int(timestamp_str)
    except ValueError:
        logger.warning("Stripe webhook rechazado: timestamp no numérico")
        return False

    drift = abs(int(clock()) - timestamp)
    if drift > tolerance_seconds:
        logger.warning(
            "Stripe webhook rechazado: timestamp fuera de tolerancia. "
            "Diferencia: %ss, tolerancia: %ss",
            drift,
            tolerance_seconds,
        )
        return False

    expected_signature = compute_signature(payload, timestamp, webhook_secret)
    for sig in signatures_v1:
        if hmac.compare_digest(expected_signature, sig):
            logger.debug("Stripe webhook: firma verificada correctamente")
            return True

    logger.warning("Stripe webhook rechazado: firma no coincide")
    return False


__all__ = ["compute_signature", "parse_signature_header", "verify_stripe_signature"]

# Fin del archivo backend/app/modules/orders/services/webhooks/signature_verification.py
