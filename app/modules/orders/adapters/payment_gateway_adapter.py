# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/payment_gateway_adapter.py

Adaptador estrecho sobre Stripe Checkout.

Operaciones:
- retrieve_session(id): sesión + TODAS sus líneas (list_line_items paginado
  por has_more/starting_after, con el producto de cada precio expandido).
  La expansión line_items de la sesión trae solo la primera página.
- list_completed_sessions(created_gte): sesiones completas en la ventana, paginando
  por has_more/starting_after hasta max_pages
- create_checkout_session(...): sesión hospedada, retorna (session_id, url)

El SDK de Stripe es síncrono: cada llamada corre en threadpool y se acota con
asyncio.wait_for(timeout). Un timeout es un fallo de esa llamada.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import stripe
from fastapi.concurrency import run_in_threadpool

from app.modules.orders.errors import PaymentProviderError
from app.modules.orders.models import (
    CheckoutSession,
    CustomerContact,
    LineItem,
    ShippingAddress,
)

logger = logging.getLogger(__name__)

LINE_ITEMS_EXPAND = ["data.price.product"]
LINE_ITEMS_PAGE_SIZE = 100
PRODUCT_REF_METADATA_KEY = "microCmsId"


def _field(obj: Any, name: str, default: Any = None) -> Any:
    """Acceso uniforme a StripeObject, dict o None."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        value = obj.get(name, default)
    else:
        try:
            value = obj[name]
        except (KeyError, TypeError, AttributeError):
            value = getattr(obj, name, default)
    return default if value is None else value


def _map_line_item(raw: Any) -> LineItem:
    price = _field(raw, "price")
    product = _field(price, "product")
    # Sin expand, product llega como id string y no trae metadata
    if isinstance(product, str):
        product = None
    metadata = _field(product, "metadata", {})
    product_id = str(_field(metadata, PRODUCT_REF_METADATA_KEY, "") or "")
    name = _field(raw, "description") or _field(product, "name", "")

    if not product_id:
        logger.warning(
            "checkout_line_item_without_product_ref line_item=%s", _field(raw, "id", "?")
        )

    return LineItem(
        product_id=product_id,
        name=str(name or ""),
        unit_price=int(_field(price, "unit_amount", 0) or 0),
        quantity=int(_field(raw, "quantity", 1) or 1),
    )


def _map_shipping(raw_session: Any) -> Optional[ShippingAddress]:
    collected = _field(raw_session, "collected_information")
    details = _field(collected, "shipping_details") or _field(raw_session, "shipping_details")
    if not details:
        return None
    address = _field(details, "address", {})
    return ShippingAddress(
        name=str(_field(details, "name", "")),
        postal_code=str(_field(address, "postal_code", "")),
        state=str(_field(address, "state", "")),
        city=str(_field(address, "city", "")),
        line1=str(_field(address, "line1", "")),
        line2=str(_field(address, "line2", "")),
    )


def map_session(raw_session: Any, raw_line_items: Optional[List[Any]] = None) -> CheckoutSession:
    """
    Convierte una sesión de Stripe (objeto o dict) al modelo de dominio.

    raw_line_items: líneas ya listadas por separado; si falta se usa la
    expansión line_items de la sesión (si viene).
    """
    customer_details = _field(raw_session, "customer_details")
    if raw_line_items is None:
        raw_line_items = _field(_field(raw_session, "line_items"), "data", []) or []

    payment_intent = _field(raw_session, "payment_intent")
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = _field(payment_intent, "id")

    return CheckoutSession(
        session_id=str(_field(raw_session, "id", "")),
        payment_intent_id=payment_intent or None,
        amount_total=int(_field(raw_session, "amount_total", 0) or 0),
        currency=str(_field(raw_session, "currency", "")),
        created=int(_field(raw_session, "created", 0) or 0),
        customer=CustomerContact(
            email=str(_field(customer_details, "email", "")),
            name=str(_field(customer_details, "name", "")),
            phone=str(_field(customer_details, "phone", "")),
        ),
        shipping=_map_shipping(raw_session),
        line_items=[_map_line_item(item) for item in raw_line_items],
        status=_field(raw_session, "status"),
        url=_field(raw_session, "url"),
    )


class StripeGateway:
    """Cliente async del proveedor de pagos."""

    def __init__(self, secret_key: Optional[str], timeout_seconds: float = 20.0):
        self._secret_key = secret_key or ""
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    async def _call(self, operation: str, fn: Callable[..., Any], **params: Any) -> Any:
        if not self.is_configured:
            raise PaymentProviderError("Stripe is not configured. Set STRIPE_SECRET_KEY.")
        try:
            return await asyncio.wait_for(
                run_in_threadpool(fn, api_key=self._secret_key, **params),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise PaymentProviderError(
                f"{operation} excedió {self.timeout_seconds}s"
            ) from e
        except stripe.StripeError as e:
            raise PaymentProviderError(f"{operation} falló: {e}") from e

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        raw = await self._call(
            "retrieve_session",
            stripe.checkout.Session.retrieve,
            id=session_id,
        )
        raw_items = await self.list_line_items(session_id)
        return map_session(raw, raw_items)

    async def list_line_items(self, session_id: str) -> List[Any]:
        items: List[Any] = []
        starting_after: Optional[str] = None

        while True:
            params: Dict[str, Any] = {
                "limit": LINE_ITEMS_PAGE_SIZE,
                "expand": LINE_ITEMS_EXPAND,
            }
            if starting_after:
                params["starting_after"] = starting_after

            page = await self._call(
                "list_line_items",
                stripe.checkout.Session.list_line_items,
                session=session_id,
                **params,
            )
            data = _field(page, "data", []) or []
            items.extend(data)

            if not _field(page, "has_more", False) or not data:
                return items
            starting_after = str(_field(data[-1], "id"))

    async def list_completed_sessions(
        self,
        created_gte: int,
        page_size: int = 100,
        max_pages: int = 10,
    ) -> List[CheckoutSession]:
        sessions: List[CheckoutSession] = []
        starting_after: Optional[str] = None

        for page in range(max_pages):
            params: Dict[str, Any] = {
                "created": {"gte": created_gte},
                "status": "complete",
                "limit": page_size,
            }
            if starting_after:
                params["starting_after"] = starting_after

            result = await self._call(
                "list_sessions", stripe.checkout.Session.list, **params
            )
            data = _field(result, "data", []) or []
            sessions.extend(map_session(item) for item in data)

            if not _field(result, "has_more", False) or not data:
                break
            starting_after = str(_field(data[-1], "id"))
        else:
            logger.warning(
                "stripe_list_sessions_page_cap_reached max_pages=%s fetched=%s",
                max_pages,
                len(sessions),
            )

        return sessions

    async def create_checkout_session(
        self,
        *,
        line_items: List[Dict[str, Any]],
        success_url: str,
        cancel_url: str,
        locale: str,
        allowed_countries: List[str],
        metadata: Optional[Dict[str, str]] = None,
    ) -> Tuple[str, str]:
        raw = await self._call(
            "create_checkout_session",
            stripe.checkout.Session.create,
            payment_method_types=["card"],
            line_items=line_items,
            mode="payment",
            success_url=success_url,
            cancel_url=cancel_url,
            locale=locale,
            shipping_address_collection={"allowed_countries": allowed_countries},
            metadata=metadata or {},
        )
        session_id = str(_field(raw, "id", ""))
        url = _field(raw, "url")
        if not url:
            raise PaymentProviderError("Stripe no devolvió URL de checkout")
        logger.info("stripe_checkout_session_created session_id=%s", session_id)
        return session_id, str(url)


__all__ = [
    "StripeGateway",
    "map_session",
    "LINE_ITEMS_EXPAND",
    "PRODUCT_REF_METADATA_KEY",
]

# Fin del archivo backend/app/modules/orders/adapters/payment_gateway_adapter.py
