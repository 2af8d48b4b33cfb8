# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/reconciliation/core.py

Auditoría de pagos completados contra el ledger de pedidos.

Detecta pedidos cobrados cuyo registro falló (ledger caído, webhook perdido):
- Lista sesiones status=complete creadas en la ventana (default 24h)
- Omite sesiones sin payment_intent (no tienen order_id estable)
- El ledger se lee UNA vez por corrida (order_ids) y cada sesión se busca
  en ese conjunto; la cuota de lectura de Sheets no escala con las sesiones
- Con ≥ 1 discrepancia se envía UNA notificación agregada

Solo lectura: no corrige nada, los operadores deciden.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from app.modules.orders.adapters.ledger_adapter import GoogleSheetsLedger
from app.modules.orders.adapters.notifier_adapter import SlackNotifier
from app.modules.orders.adapters.payment_gateway_adapter import StripeGateway
from app.modules.orders.metrics import observe_reconciliation

from .report import format_mismatch_report

logger = logging.getLogger(__name__)


class ReconciliationResult:
    """Resultado de una corrida de reconciliación."""

    def __init__(self) -> None:
        self.checked: int = 0
        self.skipped: int = 0
        self.mismatches: List[Dict[str, Any]] = []
        self.notified: bool = False
        self.reconciled_at: datetime = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {"checked": self.checked, "mismatches": len(self.mismatches)}


class ReconciliationJob:
    def __init__(
        self,
        *,
        gateway: StripeGateway,
        ledger: GoogleSheetsLedger,
        notifier: SlackNotifier,
        window_hours: int = 24,
        page_size: int = 100,
        max_pages: int = 10,
        clock: Callable[[], float] = time.time,
    ):
        self.gateway = gateway
        self.ledger = ledger
        self.notifier = notifier
        self.window_hours = window_hours
        self.page_size = page_size
        self.max_pages = max_pages
        self._clock = clock

    async def run(self) -> ReconciliationResult:
        """
        Ejecuta la auditoría.

        Raises:
            PaymentProviderError / LedgerReadError: la corrida se aborta sin notificar
            discrepancias parciales; el caller responde 500.
        """
        result = ReconciliationResult()
        created_gte = int(self._clock()) - self.window_hours * 3600

        logger.info("reconciliation_started window_hours=%s", self.window_hours)

        try:
            sessions = await self.gateway.list_completed_sessions(
                created_gte, page_size=self.page_size, max_pages=self.max_pages
            )

            result.checked = len(sessions)
            recorded = (
                await self.ledger.order_ids()
                if any(s.payment_intent_id for s in sessions)
                else set()
            )
            for session in sessions:
                if not session.payment_intent_id:
                    result.skipped += 1
                    continue

                if session.payment_intent_id not in recorded:
                    result.mismatches.append(
                        {
                            "session_id": session.session_id,
                            "payment_intent_id": session.payment_intent_id,
                            "amount_total": session.amount_total,
                        }
                    )
        except Exception:
            observe_reconciliation("error")
            raise

        if result.mismatches:
            await self.notifier.notify(format_mismatch_report(result.mismatches, self.window_hours))
            result.notified = True

        observe_reconciliation("ok", len(result.mismatches))
        logger.info(
            "reconciliation_completed checked=%s skipped=%s mismatches=%s",
            result.checked,
            result.skipped,
            len(result.mismatches),
        )
        return result


__all__ = ["ReconciliationJob", "ReconciliationResult"]

# Fin del archivo backend/app/modules/orders/facades/reconciliation/core.py
