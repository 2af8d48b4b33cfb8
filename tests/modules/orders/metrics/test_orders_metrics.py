# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/metrics/test_orders_metrics.py

Los contadores del flujo de pedidos se incrementan en el registry por defecto.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
import pytest
from prometheus_client import REGISTRY


def _value(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.mark.asyncio
async def test_fulfillment_outcomes_are_counted(workflow, gateway, session_factory, event_body, sign_headers):
    gateway.sessions["cs_test_1"] = session_factory()
    done_before = _value("orders_fulfillment_outcome_total", outcome="done")
    dup_before = _value("orders_fulfillment_outcome_total", outcome="duplicate")
    appended_before = _value("orders_ledger_append_total", result="appended")

    body = event_body()
    await workflow.run(body, sign_headers(body))
    await workflow.run(body, sign_headers(body))

    assert _value("orders_fulfillment_outcome_total", outcome="done") == done_before + 1
    assert _value("orders_fulfillment_outcome_total", outcome="duplicate") == dup_before + 1
    assert _value("orders_ledger_append_total", result="appended") == appended_before + 1


@pytest.mark.asyncio
async def test_rejections_are_counted_by_reason(workflow, event_body):
    before = _value("orders_webhook_rejected_total", provider="stripe", reason="missing_signature")
    await workflow.run(event_body(), {})
    assert _value("orders_webhook_rejected_total", provider="stripe", reason="missing_signature") == before + 1


@pytest.mark.asyncio
async def test_reconciliation_mismatches_are_counted(reconciliation, gateway, session_factory):
    gateway.completed.append(session_factory("cs_1", payment_intent_id="pi_1"))
    runs_before = _value("orders_reconciliation_runs_total", result="ok")
    mismatches_before = _value("orders_reconciliation_mismatches_total")

    await reconciliation.run()

    assert _value("orders_reconciliation_runs_total", result="ok") == runs_before + 1
    assert _value("orders_reconciliation_mismatches_total") == mismatches_before + 1
