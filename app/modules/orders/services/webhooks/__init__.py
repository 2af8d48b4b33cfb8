# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/webhooks/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .signature_verification import parse_signature_header, verify_stripe_signature

__all__ = ["parse_signature_header", "verify_stripe_signature"]
