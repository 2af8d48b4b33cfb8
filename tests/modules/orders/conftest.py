# backend/tests/modules/orders/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures del módulo Orders.

Dobles en memoria para los cuatro sistemas externos (catálogo, ledger,
proveedor de pagos y canal de chat) con la misma superficie que los
adaptadores reales. Permiten contar llamadas e inyectar fallos.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import asyncio
import hashlib
import hmac
import json
import time
from dataclasses import replace
from types import SimpleNamespace
from typing import Dict, List, Optional

import httpx
import pytest

from app.modules.orders.errors import (
    CatalogReadError,
    CatalogWriteError,
    LedgerReadError,
    LedgerWriteError,
    PaymentProviderError,
)
from app.modules.orders.models import (
    CheckoutSession,
    CustomerContact,
    LineItem,
    OrderRecord,
    ProductStock,
    ShippingAddress,
)

WEBHOOK_SECRET = "whsec_test_dummy"
CRON_SECRET = "cron_test_dummy"


# ---------------------------------------------------------------------------
# Dobles
# ---------------------------------------------------------------------------
class FakeCatalog:
    def __init__(self, products: Optional[Dict[str, ProductStock]] = None):
        self.products: Dict[str, ProductStock] = dict(products or {})
        self.service_domain = "test-shop"
        self.reads: List[str] = []
        self.writes: List[tuple] = []
        self.fail_read_for: set = set()
        self.fail_write_for: set = set()
        # Pausa dentro del read-modify-write para exponer carreras
        self.read_delay: float = 0.0

    def add(self, product_id: str, *, name: str = "", price: int = 1000, stock: int = 5, is_active: bool = True):
        self.products[product_id] = ProductStock(
            product_id=product_id,
            name=name or f"Producto {product_id}",
            price=price,
            stock=stock,
            is_active=is_active,
        )

    def stock_of(self, product_id: str) -> int:
        return self.products[product_id].stock

    async def get_product(self, product_id: str) -> ProductStock:
        self.reads.append(product_id)
        if product_id in self.fail_read_for:
            raise CatalogReadError(f"catálogo inaccesible: {product_id}", product_id=product_id)
        if product_id not in self.products:
            raise CatalogReadError(f"producto desconocido: {product_id}", product_id=product_id)
        product = self.products[product_id]
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        return product

    async def set_stock(self, product_id: str, new_stock: int) -> None:
        if product_id in self.fail_write_for:
            raise CatalogWriteError("Failed to update stock: 500", product_id=product_id)
        self.writes.append((product_id, new_stock))
        self.products[product_id] = replace(self.products[product_id], stock=new_stock)


class FakeLedger:
    def __init__(self):
        self.spreadsheet_id = "sheet_test_dummy"
        self.records: List[OrderRecord] = []
        self.fail_read = False
        self.fail_write = False
        self.append_calls = 0
        self.lookups: List[str] = []
        self.full_reads = 0

    async def append(self, record: OrderRecord) -> None:
        self.append_calls += 1
        if self.fail_write:
            raise LedgerWriteError("Sheets respondió 503")
        # Ventana entre el chequeo de duplicado y la escritura
        await asyncio.sleep(0)
        self.records.append(record)

    async def find_by_order_id(self, order_id: str) -> Optional[OrderRecord]:
        self.lookups.append(order_id)
        if self.fail_read:
            raise LedgerReadError("Sheets respondió 503")
        await asyncio.sleep(0)
        for record in self.records:
            if record.order_id == order_id:
                return record
        return None

    async def order_ids(self) -> set:
        self.full_reads += 1
        if self.fail_read:
            raise LedgerReadError("Sheets respondió 503")
        return {record.order_id for record in self.records}


class FakeGateway:
    def __init__(self):
        self.sessions: Dict[str, CheckoutSession] = {}
        self.completed: List[CheckoutSession] = []
        self.created: List[dict] = []
        self.retrieve_calls: List[str] = []
        self.fail_retrieve = False
        self.fail_list = False
        self.fail_create = False

    @property
    def is_configured(self) -> bool:
        return True

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        self.retrieve_calls.append(session_id)
        if self.fail_retrieve or session_id not in self.sessions:
            raise PaymentProviderError(f"retrieve_session falló: No such checkout.session: {session_id}")
        return self.sessions[session_id]

    async def list_completed_sessions(self, created_gte: int, page_size: int = 100, max_pages: int = 10):
        if self.fail_list:
            raise PaymentProviderError("list_sessions falló: api_connection_error")
        return [s for s in self.completed if s.created >= created_gte]

    async def create_checkout_session(self, **kwargs):
        if self.fail_create:
            raise PaymentProviderError("create_checkout_session falló: card_declined")
        self.created.append(kwargs)
        session_id = f"cs_test_{len(self.created)}"
        return session_id, f"https://checkout.stripe.com/c/pay/{session_id}"


class FakeTokenEndpoint:
    """
    Transporte de google-auth (callable estilo google.auth.transport.Request)
    con respuestas encoladas; la última se repite.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [(200, {"access_token": "ya29.test", "expires_in": 3599})]
        self.calls: List[dict] = []

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "method": method, "body": body})
        status, data = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(data, dict):
            data = json.dumps(data).encode("utf-8")
        return SimpleNamespace(status=status, headers={"content-type": "application/json"}, data=data)


class RecordingNotifier:
    def __init__(self, enabled: bool = True):
        self.messages: List[str] = []
        self.errors: List[tuple] = []
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def notify(self, message: str, blocks=None) -> None:
        self.messages.append(message)

    async def notify_error(self, error: str, context: str) -> None:
        self.errors.append((error, context))
        self.messages.append(f"⚠️ Ocurrió un error\n\nContexto: {context}\nError: {error}")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
def make_session(
    session_id: str = "cs_test_1",
    *,
    payment_intent_id: Optional[str] = "pi_test_1",
    items: Optional[List[LineItem]] = None,
    amount_total: Optional[int] = None,
    created: Optional[int] = None,
) -> CheckoutSession:
    items = items if items is not None else [
        LineItem(product_id="prod_a", name="Producto A", unit_price=1000, quantity=2)
    ]
    total = amount_total if amount_total is not None else sum(i.subtotal for i in items)
    return CheckoutSession(
        session_id=session_id,
        payment_intent_id=payment_intent_id,
        amount_total=total,
        currency="jpy",
        created=created if created is not None else int(time.time()),
        customer=CustomerContact(email="hanako@example.com", name="Hanako Yamada", phone="+81 90-0000-0000"),
        shipping=ShippingAddress(
            name="山田 花子",
            postal_code="150-0001",
            state="東京都",
            city="渋谷区",
            line1="神宮前1-2-3",
            line2="",
        ),
        line_items=items,
        status="complete",
    )


def make_stripe_sig(payload: bytes, secret: str = WEBHOOK_SECRET, ts: Optional[int] = None) -> str:
    """Genera una firma Stripe válida para testing."""
    ts = int(time.time()) if ts is None else ts
    signed = f"{ts}.".encode("utf-8") + payload
    mac = hmac.new(secret.encode("utf-8"), msg=signed, digestmod=hashlib.sha256)
    return f"t={ts},v1={mac.hexdigest()}"


def make_event_body(session_id: str = "cs_test_1", event_type: str = "checkout.session.completed") -> bytes:
    return json.dumps(
        {
            "id": "evt_test_1",
            "type": event_type,
            "data": {"object": {"id": session_id, "object": "checkout.session"}},
        }
    ).encode("utf-8")


def signed_headers(body: bytes, secret: str = WEBHOOK_SECRET) -> Dict[str, str]:
    return {"Stripe-Signature": make_stripe_sig(body, secret)}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def catalog():
    fake = FakeCatalog()
    fake.add("prod_a", name="Producto A", price=1000, stock=5)
    fake.add("prod_b", name="Producto B", price=500, stock=1)
    return fake


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def stock_service(catalog, notifier):
    from app.modules.orders.services import StockService

    return StockService(catalog, notifier)


@pytest.fixture
def workflow(gateway, stock_service, ledger, notifier):
    from app.modules.orders.facades.fulfillment import FulfillmentWorkflow

    return FulfillmentWorkflow(
        gateway=gateway,
        stock_service=stock_service,
        ledger=ledger,
        notifier=notifier,
        webhook_secret=WEBHOOK_SECRET,
        tz_name="Asia/Tokyo",
    )


@pytest.fixture
def reconciliation(gateway, ledger, notifier):
    from app.modules.orders.facades.reconciliation import ReconciliationJob

    return ReconciliationJob(gateway=gateway, ledger=ledger, notifier=notifier)


@pytest.fixture
def checkout_options():
    from app.modules.orders.facades.checkout import CheckoutOptions

    return CheckoutOptions()


@pytest.fixture
async def order_services(catalog, ledger, gateway, notifier, stock_service, workflow, reconciliation, checkout_options):
    from app.modules.orders.dependencies import OrderServices

    services = OrderServices(
        http_client=httpx.AsyncClient(),
        notifier=notifier,
        catalog=catalog,
        ledger=ledger,
        gateway=gateway,
        stock_service=stock_service,
        workflow=workflow,
        reconciliation=reconciliation,
        checkout_options=checkout_options,
        cron_secret=CRON_SECRET,
    )
    yield services
    await services.aclose()


@pytest.fixture
async def api_client(test_settings, order_services):
    """Cliente httpx contra la app real con los servicios de Orders sustituidos por dobles."""
    from asgi_lifespan import LifespanManager
    from httpx import ASGITransport, AsyncClient

    from app.main import create_app
    from app.modules.orders.dependencies import get_order_services

    app = create_app(test_settings)
    app.dependency_overrides[get_order_services] = lambda: order_services

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture(scope="session")
def rsa_private_pem():
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric import rsa

    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def token_endpoint():
    return FakeTokenEndpoint


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def event_body():
    return make_event_body


@pytest.fixture
def sign_headers():
    return signed_headers


# Fin del archivo backend/tests/modules/orders/conftest.py
