# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/checkout/__init__.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .start_checkout import CheckoutOptions, build_line_item, check_stock, start_checkout
from .validators import validate_cart_not_empty, validate_line, validate_quantity

__all__ = [
    "CheckoutOptions",
    "build_line_item",
    "check_stock",
    "start_checkout",
    "validate_cart_not_empty",
    "validate_line",
    "validate_quantity",
]
