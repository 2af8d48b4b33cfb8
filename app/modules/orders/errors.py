# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/errors.py

Taxonomía de errores del flujo de pedidos.

Jerarquía:
    OrderFlowError
    ├── AuthenticationError        firma inválida / secreto de cron inválido
    ├── CheckoutValidationError    carrito vacío, producto inactivo, stock insuficiente
    ├── UpstreamReadError          catálogo / proveedor / ledger inaccesibles (lectura)
    │   ├── CatalogReadError
    │   ├── LedgerReadError
    │   └── PaymentProviderError
    ├── UpstreamWriteError         escrituras de bookkeeping (no abortan el workflow)
    │   ├── CatalogWriteError
    │   └── LedgerWriteError
    └── NotificationError          solo se registra en logs, nunca se propaga

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Optional


class OrderFlowError(Exception):
    """Base de todos los errores del módulo de pedidos."""


class AuthenticationError(OrderFlowError):
    """Firma de webhook o secreto de job programado inválido."""


class CheckoutValidationError(OrderFlowError):
    """Carrito rechazado antes de cualquier mutación externa."""

    def __init__(self, message: str, product_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.product_id = product_id


class UpstreamReadError(OrderFlowError):
    """Lectura fallida contra un sistema externo."""


class CatalogReadError(UpstreamReadError):
    """Producto desconocido o catálogo inaccesible."""

    def __init__(self, message: str, product_id: Optional[str] = None):
        super().__init__(message)
        self.product_id = product_id


class LedgerReadError(UpstreamReadError):
    """No fue posible leer la hoja de pedidos."""


class PaymentProviderError(UpstreamReadError):
    """Error de transporte o de API del proveedor de pagos."""


class UpstreamWriteError(OrderFlowError):
    """Escritura fallida contra un sistema externo."""


class CatalogWriteError(UpstreamWriteError):
    def __init__(self, message: str, product_id: Optional[str] = None):
        super().__init__(message)
        self.product_id = product_id


class LedgerWriteError(UpstreamWriteError):
    """No fue posible agregar la fila del pedido."""


class NotificationError(OrderFlowError):
    """Fallo del canal de chat. Nunca sale del Notifier."""


__all__ = [
    "OrderFlowError",
    "AuthenticationError",
    "CheckoutValidationError",
    "UpstreamReadError",
    "CatalogReadError",
    "LedgerReadError",
    "PaymentProviderError",
    "UpstreamWriteError",
    "CatalogWriteError",
    "LedgerWriteError",
    "NotificationError",
]

# Fin del archivo backend/app/modules/orders/errors.py
