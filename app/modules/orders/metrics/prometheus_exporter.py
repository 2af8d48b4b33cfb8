# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/metrics/prometheus_exporter.py

Métricas Prometheus del flujo de pedidos.

Se registran en el registro global de prometheus_client, de modo que el
endpoint /metrics de app/observability/prom.py las expone junto con las
métricas HTTP.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from prometheus_client import Counter, Histogram

# --------------------------------------------------------------------------
# Webhooks
# --------------------------------------------------------------------------
WEBHOOKS_RECEIVED_TOTAL = Counter(
    "orders_webhook_received_total",
    "Total webhooks de pago recibidos",
    ["provider"],
)
WEBHOOKS_REJECTED_TOTAL = Counter(
    "orders_webhook_rejected_total",
    "Total webhooks rechazados por razón",
    ["provider", "reason"],  # reason: missing_signature/invalid_signature/invalid_json
)
FULFILLMENT_OUTCOME_TOTAL = Counter(
    "orders_fulfillment_outcome_total",
    "Total corridas de fulfillment por estado terminal",
    ["outcome"],  # outcome: done/failed/ignored/duplicate
)
FULFILLMENT_SECONDS = Histogram(
    "orders_fulfillment_seconds",
    "Duración del fulfillment de un evento (segundos)",
    ["outcome"],
)

# --------------------------------------------------------------------------
# Side effects
# --------------------------------------------------------------------------
STOCK_ADJUSTMENTS_TOTAL = Counter(
    "orders_stock_adjustment_total",
    "Ajustes de stock por resultado",
    ["outcome"],  # ok/error/skipped
)
LEDGER_APPENDS_TOTAL = Counter(
    "orders_ledger_append_total",
    "Escrituras al ledger por resultado",
    ["result"],  # appended/failed
)

# --------------------------------------------------------------------------
# Reconciliación
# --------------------------------------------------------------------------
RECONCILIATION_RUNS_TOTAL = Counter(
    "orders_reconciliation_runs_total",
    "Corridas de reconciliación por resultado",
    ["result"],  # ok/error
)
RECONCILIATION_MISMATCHES_TOTAL = Counter(
    "orders_reconciliation_mismatches_total",
    "Pagos completos sin fila en el ledger",
)


def observe_webhook_received(provider: str = "stripe") -> None:
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_rejected(reason: str, provider: str = "stripe") -> None:
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()


def observe_fulfillment_outcome(outcome: str, duration: float) -> None:
    FULFILLMENT_OUTCOME_TOTAL.labels(outcome=outcome).inc()
    FULFILLMENT_SECONDS.labels(outcome=outcome).observe(duration)


def observe_stock_adjustment(outcome: str) -> None:
    STOCK_ADJUSTMENTS_TOTAL.labels(outcome=outcome).inc()


def observe_ledger_append(result: str) -> None:
    LEDGER_APPENDS_TOTAL.labels(result=result).inc()


def observe_reconciliation(result: str, mismatches: int = 0) -> None:
    RECONCILIATION_RUNS_TOTAL.labels(result=result).inc()
    if mismatches:
        RECONCILIATION_MISMATCHES_TOTAL.inc(mismatches)


__all__ = [
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_fulfillment_outcome",
    "observe_stock_adjustment",
    "observe_ledger_append",
    "observe_reconciliation",
]

# Fin del archivo backend/app/modules/orders/metrics/prometheus_exporter.py
