# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/notifier_adapter.py

Notificador del canal de operaciones (Slack Incoming Webhook).

Contrato:
- notify(message, blocks=None) nunca lanza excepciones al caller.
- Sin SLACK_WEBHOOK_URL configurado: no-op visible solo en logs (warning).
- Fallo de transporte o respuesta no-2xx: se registra en logs y se retorna.

Best-effort: una notificación fallida jamás bloquea el fulfillment.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.modules.orders.errors import NotificationError

logger = logging.getLogger(__name__)


def format_error_message(error: str, context: str) -> str:
    return f"⚠️ Ocurrió un error\n\nContexto: {context}\nError: {error}"


class SlackNotifier:
    """Envía mensajes de texto (y bloques opcionales) a un webhook de Slack."""

    def __init__(
        self,
        webhook_url: Optional[str],
        http_client: httpx.AsyncClient,
    ):
        self.webhook_url = (webhook_url or "").strip() or None
        self._http = http_client

    @property
    def enabled(self) -> bool:
        return self.webhook_url is not None

    async def notify(
        self,
        message: str,
        blocks: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        if not self.enabled:
            logger.warning("slack_notification_skipped reason=webhook_not_configured")
            return

        payload: Dict[str, Any] = {"text": message}
        if blocks:
            payload["blocks"] = blocks

        try:
            await self._post(payload)
        except NotificationError as e:
            logger.error("slack_notification_failed error=%s", e)
        except Exception as e:  # pragma: no cover - salvaguarda del contrato "never throws"
            logger.exception("slack_notification_unexpected_error error=%s", e)

    async def notify_error(self, error: str, context: str) -> None:
        """Mensaje de error con contexto para operadores."""
        await self.notify(format_error_message(error, context))

    async def _post(self, payload: Dict[str, Any]) -> None:
        try:
            response = await self._http.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"transport error: {e!r}") from e

        if response.status_code >= 400:
            raise NotificationError(f"Slack respondió {response.status_code}")

        logger.debug("slack_notification_sent status=%s", response.status_code)


__all__ = ["SlackNotifier", "format_error_message"]

# Fin del archivo backend/app/modules/orders/adapters/notifier_adapter.py
