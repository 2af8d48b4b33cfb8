# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/ledger_adapter.py

Ledger de pedidos sobre Google Sheets (API REST v4).

- append(record): values:append con valueInputOption=USER_ENTERED.
- find_by_order_id(id): lee todo el rango y busca la primera fila cuya
  columna A coincide (escaneo lineal; O(n) en filas, suficiente para el
  volumen de una tienda pequeña).
- order_ids(): una sola lectura con todos los order_id (reconciliación).

Errores:
- LedgerWriteError en cualquier fallo del append (transporte, autenticación,
  respuesta inesperada).
- LedgerReadError en fallos de lectura; "no encontrado" es None.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Set
from urllib.parse import quote

import httpx

from app.modules.orders.adapters.google_auth import (
    GoogleAuthError,
    ServiceAccountTokenProvider,
)
from app.modules.orders.adapters.ledger_schema import LedgerSchema, get_schema
from app.modules.orders.errors import LedgerReadError, LedgerWriteError
from app.modules.orders.models import OrderRecord

logger = logging.getLogger(__name__)

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"


class GoogleSheetsLedger:
    """Registro append-only de pedidos, una fila por order_id."""

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        token_provider: ServiceAccountTokenProvider,
        http_client: httpx.AsyncClient,
        range_a1: str = "注文一覧!A:O",
        schema_version: str = "v1",
    ):
        self.spreadsheet_id = spreadsheet_id
        self.range_a1 = range_a1
        self.schema: LedgerSchema = get_schema(schema_version)
        self._tokens = token_provider
        self._http = http_client

    def _values_url(self, suffix: str = "") -> str:
        return f"{SHEETS_API_BASE}/{self.spreadsheet_id}/values/{quote(self.range_a1, safe='')}{suffix}"

    async def _auth_headers(self) -> dict:
        token = await self._tokens.get_token()
        return {"Authorization": f"Bearer {token}"}

    async def append(self, record: OrderRecord) -> None:
        if not self.spreadsheet_id:
            raise LedgerWriteError("GOOGLE_SPREADSHEET_ID no configurado")

        row = self.schema.to_row(record)
        try:
            headers = await self._auth_headers()
            response = await self._http.post(
                self._values_url(":append"),
                params={"valueInputOption": "USER_ENTERED"},
                headers=headers,
                json={"values": [row]},
            )
        except GoogleAuthError as e:
            raise LedgerWriteError(f"autenticación con Google falló: {e}") from e
        except httpx.HTTPError as e:
            raise LedgerWriteError(f"Sheets inaccesible: {e!r}") from e
        except (ValueError, TypeError) as e:
            raise LedgerWriteError(f"append no enviado: {e!r}") from e

        if response.status_code >= 400:
            raise LedgerWriteError(f"append respondió {response.status_code}")

        logger.info("ledger_row_appended order_id=%s", record.order_id)

    async def read_rows(self) -> List[List[Any]]:
        if not self.spreadsheet_id:
            raise LedgerReadError("GOOGLE_SPREADSHEET_ID no configurado")

        try:
            headers = await self._auth_headers()
            response = await self._http.get(self._values_url(), headers=headers)
        except GoogleAuthError as e:
            raise LedgerReadError(f"autenticación con Google falló: {e}") from e
        except httpx.HTTPError as e:
            raise LedgerReadError(f"Sheets inaccesible: {e!r}") from e
        except (ValueError, TypeError) as e:
            raise LedgerReadError(f"lectura no enviada: {e!r}") from e

        if response.status_code >= 400:
            raise LedgerReadError(f"lectura respondió {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise LedgerReadError(f"respuesta inválida de Sheets: {e}") from e
        if not isinstance(body, dict):
            raise LedgerReadError("respuesta inválida de Sheets: se esperaba un objeto")
        values = body.get("values") or []
        if not isinstance(values, list):
            raise LedgerReadError("respuesta inválida de Sheets: values no es una lista")
        return [row for row in values if isinstance(row, list)]

    async def find_by_order_id(self, order_id: str) -> Optional[OrderRecord]:
        if not order_id:
            return None

        column = self.schema.order_id_column
        for row in await self.read_rows():
            if len(row) > column and str(row[column]) == order_id:
                return self.schema.from_row(row)
        return None

    async def order_ids(self) -> Set[str]:
        column = self.schema.order_id_column
        return {
            str(row[column]) for row in await self.read_rows() if len(row) > column and row[column]
        }


__all__ = ["GoogleSheetsLedger", "SHEETS_API_BASE"]

# Fin del archivo backend/app/modules/orders/adapters/ledger_adapter.py
