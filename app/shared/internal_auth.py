# -*- coding: utf-8 -*-
"""
backend/app/shared/internal_auth.py

Autenticación por token compartido para endpoints internos (cron jobs).

Header esperado: Authorization: Bearer <token>

Fail-closed: si el backend no tiene token configurado, toda petición se
rechaza con 401 (el endpoint nunca queda abierto por omisión).

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def verify_bearer_token(authorization: Optional[str], expected_token: Optional[str]) -> None:
    """
    Raises:
        HTTPException 401: token no configurado, header ausente/malformado o token inválido.
    """
    if not expected_token:
        logger.error("internal_auth_token_not_configured")
        raise _unauthorized()

    provided_token = parse_bearer_token(authorization)
    if provided_token is None:
        logger.warning("internal_auth_missing_or_malformed_header")
        raise _unauthorized()

    # Comparación timing-safe
    if not secrets.compare_digest(provided_token.encode(), expected_token.encode()):
        logger.warning("internal_auth_invalid_token")
        raise _unauthorized()

    logger.debug("internal_auth_success")


__all__ = ["parse_bearer_token", "verify_bearer_token"]
