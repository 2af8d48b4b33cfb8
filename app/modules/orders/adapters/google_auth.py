# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/google_auth.py

Token OAuth2 de cuenta de servicio de Google (JWT bearer grant).

El flujo (firma RS256 de la aserción, intercambio en el token endpoint,
expiración) lo implementa google-auth con service_account.Credentials.
Este módulo solo:
1. Construye las credenciales a partir del email y la llave del settings.
2. Refresca en threadpool (google-auth es síncrono) con timeout.
3. Serializa refrescos concurrentes con un asyncio.Lock.
4. Traduce cualquier fallo a GoogleAuthError.

NOTA: con múltiples réplicas cada réplica obtiene su propio token.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from fastapi.concurrency import run_in_threadpool
from google.auth import exceptions as google_exceptions
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
DEFAULT_TOKEN_TIMEOUT_SECONDS = 10.0


class GoogleAuthError(Exception):
    """No se pudo obtener un access token de Google."""


class ServiceAccountTokenProvider:
    """Obtiene y cachea access tokens para una cuenta de servicio."""

    def __init__(
        self,
        client_email: Optional[str],
        private_key: Optional[str],
        scope: str = SHEETS_SCOPE,
        request: Optional[Callable[..., Any]] = None,
        timeout_seconds: float = DEFAULT_TOKEN_TIMEOUT_SECONDS,
    ):
        self.client_email = client_email
        self.private_key = private_key
        self.scope = scope
        self.timeout_seconds = timeout_seconds
        self._request = request
        self._credentials: Optional[service_account.Credentials] = None
        self._lock = asyncio.Lock()

    def build_credentials(self) -> service_account.Credentials:
        if not self.client_email or not self.private_key:
            raise GoogleAuthError(
                "GOOGLE_SERVICE_ACCOUNT_EMAIL y GOOGLE_PRIVATE_KEY son requeridos"
            )
        info = {
            "type": "service_account",
            "client_email": self.client_email,
            "private_key": self.private_key,
            "token_uri": GOOGLE_TOKEN_URL,
        }
        try:
            return service_account.Credentials.from_service_account_info(info, scopes=[self.scope])
        except (ValueError, TypeError) as e:
            raise GoogleAuthError(f"llave de cuenta de servicio inválida: {e}") from e

    def _transport(self) -> Callable[..., Any]:
        if self._request is None:
            self._request = GoogleRequest()
        return self._request

    def _valid_token(self) -> Optional[str]:
        credentials = self._credentials
        if credentials is not None and credentials.valid:
            return credentials.token
        return None

    async def get_token(self) -> str:
        token = self._valid_token()
        if token:
            return token

        async with self._lock:
            token = self._valid_token()
            if token:
                return token

            if self._credentials is None:
                self._credentials = self.build_credentials()
            credentials = self._credentials

            try:
                await asyncio.wait_for(
                    run_in_threadpool(credentials.refresh, self._transport()),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                raise GoogleAuthError(
                    f"token endpoint sin respuesta en {self.timeout_seconds}s"
                ) from e
            except google_exceptions.GoogleAuthError as e:
                raise GoogleAuthError(f"token endpoint rechazó la aserción: {e}") from e
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                # Cuerpo no JSON o expires_in ilegible (p. ej. un proxy con HTML)
                raise GoogleAuthError(f"respuesta inválida del token endpoint: {e!r}") from e

            if not credentials.token:
                raise GoogleAuthError("respuesta sin access_token")

            logger.debug("google_token_refreshed expiry=%s", credentials.expiry)
            return credentials.token

    def clear(self) -> None:
        if self._credentials is not None:
            self._credentials.token = None


__all__ = [
    "GoogleAuthError",
    "ServiceAccountTokenProvider",
    "GOOGLE_TOKEN_URL",
    "SHEETS_SCOPE",
]

# Fin del archivo backend/app/modules/orders/adapters/google_auth.py
