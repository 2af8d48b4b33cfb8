# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/facades/test_fulfillment_workflow.py

Workflow de fulfillment de punta a punta contra dobles en memoria:
transiciones de estado, idempotencia, tolerancia a fallos de bookkeeping
y respuestas al proveedor.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
import asyncio

import httpx
import pytest

from app.modules.orders.adapters.google_auth import ServiceAccountTokenProvider
from app.modules.orders.adapters.ledger_adapter import GoogleSheetsLedger
from app.modules.orders.enums import FulfillmentState, LedgerAppendResult, StockOutcome
from app.modules.orders.facades.fulfillment import FulfillmentWorkflow
from app.modules.orders.models import LineItem

S = FulfillmentState


@pytest.fixture
def completed_session(gateway, session_factory):
    session = session_factory("cs_test_1", payment_intent_id="pi_test_1")
    gateway.sessions[session.session_id] = session
    return session


async def _deliver(workflow, event_body, sign_headers, session_id="cs_test_1", **kwargs):
    body = event_body(session_id, **kwargs)
    return await workflow.run(body, sign_headers(body))


class TestSignature:
    @pytest.mark.asyncio
    async def test_invalid_signature_touches_nothing(self, workflow, gateway, catalog, ledger, notifier, event_body, sign_headers, completed_session):
        body = event_body()
        result = await workflow.run(body, sign_headers(body, "whsec_wrong"))

        assert result.status_code == 400
        assert result.body == "Invalid signature"
        assert result.final_state == S.FAILED
        assert gateway.retrieve_calls == []
        assert catalog.reads == [] and catalog.writes == []
        assert ledger.lookups == [] and ledger.append_calls == 0
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_missing_signature(self, workflow, gateway, event_body):
        result = await workflow.run(event_body(), {})
        assert result.status_code == 400
        assert result.body == "No signature"
        assert gateway.retrieve_calls == []

    @pytest.mark.asyncio
    async def test_signed_garbage_is_invalid_payload(self, workflow, sign_headers):
        body = b"not-json"
        result = await workflow.run(body, sign_headers(body))
        assert result.status_code == 400
        assert result.body == "Invalid payload"
        assert result.states == [S.RECEIVED, S.VERIFIED, S.FAILED]


class TestIgnoredEvents:
    @pytest.mark.asyncio
    async def test_other_event_types_are_acknowledged(self, workflow, gateway, ledger, event_body, sign_headers):
        result = await _deliver(workflow, event_body, sign_headers, event_type="payment_intent.succeeded")

        assert result.status_code == 200
        assert result.body == {"received": True}
        assert result.final_state == S.IGNORED
        assert gateway.retrieve_calls == []
        assert ledger.lookups == []


class TestHappyPath:
    @pytest.mark.asyncio
    async def test_full_state_sequence(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers):
        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 200
        assert result.body == {"received": True}
        assert result.states == [
            S.RECEIVED,
            S.VERIFIED,
            S.ITEMS_EXTRACTED,
            S.STOCK_ADJUSTED,
            S.RECORDED,
            S.NOTIFIED,
            S.DONE,
        ]
        assert result.order_id == "pi_test_1"
        assert result.ledger_result == LedgerAppendResult.APPENDED

        assert catalog.stock_of("prod_a") == 3
        assert len(ledger.records) == 1
        record = ledger.records[0]
        assert record.order_id == "pi_test_1"
        assert record.total_amount == 2000
        assert record.inventory_updated is True
        assert record.status == "未発送"
        assert record.dashboard_url.endswith("/pi_test_1")

        assert len(notifier.messages) == 1
        assert "2000" in notifier.messages[0]
        assert "pi_test_1" in notifier.messages[0]

    @pytest.mark.asyncio
    async def test_session_is_refetched_from_provider(self, workflow, gateway, completed_session, event_body, sign_headers):
        await _deliver(workflow, event_body, sign_headers)
        assert gateway.retrieve_calls == ["cs_test_1"]

    @pytest.mark.asyncio
    async def test_order_id_falls_back_to_session_id(self, workflow, gateway, ledger, session_factory, event_body, sign_headers):
        gateway.sessions["cs_free"] = session_factory("cs_free", payment_intent_id=None, amount_total=0)

        result = await _deliver(workflow, event_body, sign_headers, session_id="cs_free")

        assert result.status_code == 200
        assert ledger.records[0].order_id == "cs_free"

    @pytest.mark.asyncio
    async def test_line_without_product_ref_keeps_inventory_flag(self, workflow, gateway, ledger, catalog, session_factory, event_body, sign_headers):
        items = [
            LineItem(product_id="prod_a", name="Producto A", unit_price=1000, quantity=1),
            LineItem(product_id="", name="Envoltorio", unit_price=200, quantity=1),
        ]
        gateway.sessions["cs_test_1"] = session_factory(items=items)

        result = await _deliver(workflow, event_body, sign_headers)

        assert [a.outcome for a in result.adjustments] == [StockOutcome.OK, StockOutcome.SKIPPED]
        assert ledger.records[0].inventory_updated is True
        assert catalog.stock_of("prod_a") == 4


class TestIdempotency:
    @pytest.mark.asyncio
    async def test_redelivery_is_duplicate(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers):
        first = await _deliver(workflow, event_body, sign_headers)
        second = await _deliver(workflow, event_body, sign_headers)

        assert first.final_state == S.DONE
        assert second.final_state == S.DUPLICATE
        assert second.status_code == 200
        assert len(ledger.records) == 1
        assert catalog.stock_of("prod_a") == 3
        assert len(notifier.messages) == 1

    @pytest.mark.asyncio
    async def test_concurrent_redelivery_records_once(self, workflow, completed_session, catalog, ledger, event_body, sign_headers):
        results = await asyncio.gather(
            _deliver(workflow, event_body, sign_headers),
            _deliver(workflow, event_body, sign_headers),
        )

        assert sorted(r.final_state for r in results) == sorted([S.DONE, S.DUPLICATE])
        assert all(r.status_code == 200 for r in results)
        assert len(ledger.records) == 1
        assert catalog.stock_of("prod_a") == 3


class TestFailures:
    @pytest.mark.asyncio
    async def test_stock_failure_still_records_and_notifies(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers):
        catalog.fail_write_for.add("prod_a")

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 200
        assert result.final_state == S.DONE
        assert ledger.records[0].inventory_updated is False
        # error de stock + resumen del pedido
        assert len(notifier.errors) == 1
        assert "con fallos" in notifier.messages[-1]

    @pytest.mark.asyncio
    async def test_ledger_write_failure_notifies_and_acknowledges(self, workflow, completed_session, ledger, notifier, event_body, sign_headers):
        ledger.fail_write = True

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 200
        assert result.ledger_result == LedgerAppendResult.FAILED
        assert S.RECORDED in result.states
        assert result.final_state == S.DONE
        assert len(notifier.errors) == 1
        assert "ledger write failed (order pi_test_1)" in notifier.errors[0][1]
        # el resumen del pedido igual se envía
        assert any("2000" in m for m in notifier.messages)

    @pytest.mark.asyncio
    async def test_unclassified_ledger_error_after_stock_is_acknowledged(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers, monkeypatch):
        async def broken_append(record):
            raise ValueError("Expecting value: line 1 column 1")

        monkeypatch.setattr(ledger, "append", broken_append)

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 200
        assert result.final_state == S.DONE
        assert result.ledger_result == LedgerAppendResult.FAILED
        assert catalog.stock_of("prod_a") == 3
        assert notifier.errors[0][1] == "ledger write failed (order pi_test_1)"
        assert any("2000" in m for m in notifier.messages)

    @pytest.mark.asyncio
    async def test_summary_failure_does_not_fail_delivery(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers, monkeypatch):
        async def broken_notify(message, blocks=None):
            raise RuntimeError("webhook de chat caído")

        monkeypatch.setattr(notifier, "notify", broken_notify)

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 200
        assert result.final_state == S.DONE
        assert S.NOTIFIED not in result.states
        assert len(ledger.records) == 1
        assert catalog.stock_of("prod_a") == 3

    @pytest.mark.asyncio
    async def test_ledger_read_failure_is_retryable(self, workflow, completed_session, catalog, ledger, notifier, event_body, sign_headers):
        ledger.fail_read = True

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 500
        assert result.final_state == S.FAILED
        assert catalog.writes == []
        assert ledger.append_calls == 0
        assert len(notifier.errors) == 1

    @pytest.mark.asyncio
    async def test_session_fetch_failure_is_retryable(self, workflow, gateway, catalog, ledger, notifier, event_body, sign_headers):
        gateway.fail_retrieve = True

        result = await _deliver(workflow, event_body, sign_headers, session_id="cs_broken")

        assert result.status_code == 500
        assert result.body == "Processing error"
        assert result.final_state == S.FAILED
        assert catalog.reads == []
        assert ledger.append_calls == 0
        assert len(notifier.errors) == 1
        assert "cs_broken" in notifier.errors[0][1]

    @pytest.mark.asyncio
    async def test_completed_event_without_session_id(self, workflow, gateway, sign_headers):
        body = b'{"id": "evt_1", "type": "checkout.session.completed", "data": {"object": {}}}'
        result = await workflow.run(body, sign_headers(body))
        assert result.status_code == 400
        assert gateway.retrieve_calls == []

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_500(self, workflow, completed_session, notifier, event_body, sign_headers, monkeypatch):
        async def boom(items):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(workflow.stock_service, "adjust_stock", boom)

        result = await _deliver(workflow, event_body, sign_headers)

        assert result.status_code == 500
        assert result.final_state == S.FAILED
        assert notifier.errors[0][0] == "kaboom"


@pytest.mark.asyncio
async def test_garbled_token_response_after_stock_is_not_redelivered(
    gateway, stock_service, catalog, notifier, completed_session, rsa_private_pem, token_endpoint, event_body, sign_headers
):
    # El token de la lectura de duplicados expira enseguida; el refresh del append recibe HTML
    endpoint = token_endpoint(
        (200, {"access_token": "ya29.short", "expires_in": 0}),
        (200, b"<html>proxy</html>"),
    )
    tokens = ServiceAccountTokenProvider("ledger@test.iam.gserviceaccount.com", rsa_private_pem, request=endpoint)
    appends = []

    def sheets(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            appends.append(request)
            return httpx.Response(200, json={})
        return httpx.Response(200, json={"values": []})

    async with httpx.AsyncClient(transport=httpx.MockTransport(sheets)) as client:
        workflow = FulfillmentWorkflow(
            gateway=gateway,
            stock_service=stock_service,
            ledger=GoogleSheetsLedger("sheet_1", tokens, client),
            notifier=notifier,
            webhook_secret="whsec_test_dummy",
        )
        result = await _deliver(workflow, event_body, sign_headers)

    assert result.status_code == 200
    assert result.ledger_result == LedgerAppendResult.FAILED
    assert S.STOCK_ADJUSTED in result.states
    assert catalog.stock_of("prod_a") == 3
    assert appends == []
    assert any(context == "ledger write failed (order pi_test_1)" for _, context in notifier.errors)
