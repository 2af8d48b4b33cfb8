# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/fulfillment/workflow.py

Workflow de fulfillment de un pago completado.

    RECEIVED → VERIFIED → ITEMS_EXTRACTED → STOCK_ADJUSTED → RECORDED → NOTIFIED → DONE

Reglas:
- Firma ausente/ inválida: 400 sin tocar catálogo, ledger ni notificador.
- Eventos distintos de checkout.session.completed: IGNORED (200).
- La sesión se re-obtiene del proveedor; el payload del webhook no es fuente de verdad.
- Antes de cualquier mutación se busca el order_id en el ledger bajo un lock
  por pedido que se mantiene hasta el append: una reentrega termina en DUPLICATE.
- Stock, ledger y notificación son best-effort a partir de ITEMS_EXTRACTED:
  sus fallos se notifican y el webhook responde 200 (no hay reintento útil).
- Tras STOCK_ADJUSTED nunca se responde 500, aunque el fallo no esté
  clasificado: una reentrega volvería a decrementar el stock.
- Fallo irrecuperable antes de escribir (re-fetch de sesión, lectura del ledger):
  notificación de error con el session_id y 500 para que el proveedor reintente.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Union

from app.modules.orders.adapters.ledger_adapter import GoogleSheetsLedger
from app.modules.orders.adapters.notifier_adapter import SlackNotifier
from app.modules.orders.adapters.payment_gateway_adapter import StripeGateway
from app.modules.orders.enums import FulfillmentState, LedgerAppendResult
from app.modules.orders.errors import (
    LedgerReadError,
    LedgerWriteError,
    PaymentProviderError,
)
from app.modules.orders.facades.fulfillment.extract import build_order_record
from app.modules.orders.facades.fulfillment.formatting import format_order_notification
from app.modules.orders.facades.webhooks.verify import (
    InvalidWebhookPayload,
    WebhookRejected,
    parse_event,
    verify_webhook,
)
from app.modules.orders.metrics import (
    observe_fulfillment_outcome,
    observe_ledger_append,
    observe_webhook_received,
    observe_webhook_rejected,
)
from app.modules.orders.models import StockAdjustment
from app.modules.orders.services.stock_service import StockService
from app.shared.utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
PROCESSING_ERROR_BODY = "Processing error"


@dataclass
class FulfillmentResult:
    status_code: int
    body: Union[dict, str]
    states: List[FulfillmentState] = field(default_factory=list)
    order_id: Optional[str] = None
    adjustments: List[StockAdjustment] = field(default_factory=list)
    ledger_result: Optional[LedgerAppendResult] = None

    @property
    def final_state(self) -> Optional[FulfillmentState]:
        return self.states[-1] if self.states else None


class FulfillmentWorkflow:
    def __init__(
        self,
        *,
        gateway: StripeGateway,
        stock_service: StockService,
        ledger: GoogleSheetsLedger,
        notifier: SlackNotifier,
        webhook_secret: Optional[str],
        tolerance_seconds: int = 300,
        tz_name: str = "Asia/Tokyo",
        default_status: str = "未発送",
        dashboard_base_url: str = "https://dashboard.stripe.com/payments",
        order_locks: Optional[KeyedLock] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.gateway = gateway
        self.stock_service = stock_service
        self.ledger = ledger
        self.notifier = notifier
        self.webhook_secret = webhook_secret
        self.tolerance_seconds = tolerance_seconds
        self.tz_name = tz_name
        self.default_status = default_status
        self.dashboard_base_url = dashboard_base_url
        self._order_locks = order_locks or KeyedLock()
        self._clock = clock

    async def run(self, raw_body: bytes, headers: Mapping[str, str]) -> FulfillmentResult:
        started = time.perf_counter()
        result = FulfillmentResult(status_code=500, body=PROCESSING_ERROR_BODY)
        result.states.append(FulfillmentState.RECEIVED)
        observe_webhook_received()

        try:
            await self._run(raw_body, headers, result)
        except Exception as e:
            # Error no clasificado antes de responder: el proveedor reintentará
            logger.exception("fulfillment_unexpected_error order_id=%s", result.order_id)
            await self.notifier.notify_error(str(e), "Procesamiento de webhook")
            self._finish(result, FulfillmentState.FAILED, 500, PROCESSING_ERROR_BODY)

        observe_fulfillment_outcome(result.final_state.value, time.perf_counter() - started)
        return result

    def _finish(
        self,
        result: FulfillmentResult,
        state: FulfillmentState,
        status_code: int,
        body: Any,
    ) -> None:
        result.states.append(state)
        result.status_code = status_code
        result.body = body

    async def _run(
        self,
        raw_body: bytes,
        headers: Mapping[str, str],
        result: FulfillmentResult,
    ) -> None:
        # 1) Firma
        try:
            verify_webhook(
                raw_body,
                headers,
                webhook_secret=self.webhook_secret,
                tolerance_seconds=self.tolerance_seconds,
                clock=self._clock,
            )
        except WebhookRejected as e:
            observe_webhook_rejected(e.reason)
            self._finish(result, FulfillmentState.FAILED, 400, e.message)
            return
        result.states.append(FulfillmentState.VERIFIED)

        try:
            event = parse_event(raw_body)
        except InvalidWebhookPayload as e:
            logger.warning("webhook_invalid_payload error=%s", e)
            observe_webhook_rejected("invalid_json")
            self._finish(result, FulfillmentState.FAILED, 400, "Invalid payload")
            return

        if event.event_type != CHECKOUT_COMPLETED:
            logger.info("webhook_event_ignored event_id=%s type=%s", event.event_id, event.event_type)
            self._finish(result, FulfillmentState.IGNORED, 200, {"received": True})
            return

        if not event.session_id:
            observe_webhook_rejected("invalid_json")
            self._finish(result, FulfillmentState.FAILED, 400, "Invalid payload")
            return

        # 2) Re-fetch autoritativo de la sesión
        try:
            session = await self.gateway.retrieve_session(event.session_id)
        except PaymentProviderError as e:
            logger.error("fulfillment_session_fetch_failed session_id=%s error=%s", event.session_id, e)
            await self.notifier.notify_error(str(e), f"Procesamiento de webhook session={event.session_id}")
            self._finish(result, FulfillmentState.FAILED, 500, PROCESSING_ERROR_BODY)
            return

        result.order_id = session.order_id
        result.states.append(FulfillmentState.ITEMS_EXTRACTED)

        async with self._order_locks.hold(session.order_id):
            # Idempotencia frente a reentregas
            try:
                existing = await self.ledger.find_by_order_id(session.order_id)
            except LedgerReadError as e:
                logger.error("fulfillment_duplicate_check_failed order_id=%s error=%s", session.order_id, e)
                await self.notifier.notify_error(
                    str(e), f"Verificación de duplicado session={session.session_id}"
                )
                self._finish(result, FulfillmentState.FAILED, 500, PROCESSING_ERROR_BODY)
                return

            if existing is not None:
                logger.info("fulfillment_duplicate_order order_id=%s", session.order_id)
                self._finish(result, FulfillmentState.DUPLICATE, 200, {"received": True})
                return

            # 3) Stock
            result.adjustments = await self.stock_service.adjust_stock(session.line_items)
            result.states.append(FulfillmentState.STOCK_ADJUSTED)

            # 4) Ledger
            record = None
            try:
                record = build_order_record(
                    session,
                    result.adjustments,
                    tz_name=self.tz_name,
                    status=self.default_status,
                    dashboard_base_url=self.dashboard_base_url,
                )
                await self.ledger.append(record)
                result.ledger_result = LedgerAppendResult.APPENDED
            except LedgerWriteError as e:
                logger.error("fulfillment_ledger_write_failed order_id=%s error=%s", session.order_id, e)
                await self._ledger_failed(result, session.order_id, e)
            except Exception as e:
                logger.exception("fulfillment_ledger_unexpected_error order_id=%s", session.order_id)
                await self._ledger_failed(result, session.order_id, e)
            observe_ledger_append(result.ledger_result.value)
            result.states.append(FulfillmentState.RECORDED)

        # 5) Resumen para operaciones
        if record is not None:
            try:
                await self.notifier.notify(format_order_notification(record))
                result.states.append(FulfillmentState.NOTIFIED)
            except Exception:
                logger.exception("fulfillment_summary_failed order_id=%s", session.order_id)

        logger.info(
            "fulfillment_done order_id=%s inventory_updated=%s ledger=%s",
            session.order_id,
            record.inventory_updated if record is not None else None,
            result.ledger_result.value,
        )
        self._finish(result, FulfillmentState.DONE, 200, {"received": True})

    async def _ledger_failed(self, result: FulfillmentResult, order_id: str, error: Exception) -> None:
        result.ledger_result = LedgerAppendResult.FAILED
        await self.notifier.notify_error(
            str(error) or type(error).__name__, f"ledger write failed (order {order_id})"
        )


__all__ = ["FulfillmentWorkflow", "FulfillmentResult", "CHECKOUT_COMPLETED"]

# Fin del archivo backend/app/modules/orders/facades/fulfillment/workflow.py
