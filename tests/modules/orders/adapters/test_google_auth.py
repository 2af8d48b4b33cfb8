# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/adapters/test_google_auth.py

Tokens de cuenta de servicio sobre google-auth: aserción RS256,
intercambio, caché y traducción de fallos a GoogleAuthError.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
import asyncio
from urllib.parse import parse_qs

import pytest
from cryptography.hazmat.primitives import serialization
from google.auth import jwt as google_jwt

from app.modules.orders.adapters.google_auth import (
    GOOGLE_TOKEN_URL,
    SHEETS_SCOPE,
    GoogleAuthError,
    ServiceAccountTokenProvider,
)

EMAIL = "ledger@test.iam.gserviceaccount.com"


def _public_pem(private_pem: str) -> str:
    key = serialization.load_pem_private_key(private_pem.encode(), password=None)
    return key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


def _form(call) -> dict:
    body = call["body"]
    if isinstance(body, bytes):
        body = body.decode()
    return parse_qs(body)


@pytest.mark.asyncio
async def test_jwt_bearer_grant_with_signed_assertion(rsa_private_pem, token_endpoint):
    endpoint = token_endpoint()
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=endpoint)

    assert await provider.get_token() == "ya29.test"

    call = endpoint.calls[0]
    assert call["url"] == GOOGLE_TOKEN_URL
    assert call["method"] == "POST"
    form = _form(call)
    assert form["grant_type"] == ["urn:ietf:params:oauth:grant-type:jwt-bearer"]

    claims = google_jwt.decode(
        form["assertion"][0], certs=_public_pem(rsa_private_pem), audience=GOOGLE_TOKEN_URL
    )
    assert claims["iss"] == EMAIL
    assert claims["scope"] == SHEETS_SCOPE
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
async def test_token_is_cached_until_cleared(rsa_private_pem, token_endpoint):
    endpoint = token_endpoint(
        (200, {"access_token": "tok_1", "expires_in": 3599}),
        (200, {"access_token": "tok_2", "expires_in": 3599}),
    )
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=endpoint)

    assert await provider.get_token() == "tok_1"
    assert await provider.get_token() == "tok_1"
    assert len(endpoint.calls) == 1

    provider.clear()
    assert await provider.get_token() == "tok_2"
    assert len(endpoint.calls) == 2


@pytest.mark.asyncio
async def test_expired_token_is_refreshed(rsa_private_pem, token_endpoint):
    endpoint = token_endpoint(
        (200, {"access_token": "tok_1", "expires_in": 0}),
        (200, {"access_token": "tok_2", "expires_in": 3599}),
    )
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=endpoint)

    assert await provider.get_token() == "tok_1"
    assert await provider.get_token() == "tok_2"


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_exchange(rsa_private_pem, token_endpoint):
    endpoint = token_endpoint()
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=endpoint)

    tokens = await asyncio.gather(*(provider.get_token() for _ in range(5)))

    assert tokens == ["ya29.test"] * 5
    assert len(endpoint.calls) == 1


@pytest.mark.asyncio
async def test_missing_credentials_fail_without_calling_endpoint(token_endpoint):
    endpoint = token_endpoint()
    provider = ServiceAccountTokenProvider(EMAIL, None, request=endpoint)

    with pytest.raises(GoogleAuthError):
        await provider.get_token()
    assert endpoint.calls == []


@pytest.mark.asyncio
async def test_unparseable_private_key(token_endpoint):
    provider = ServiceAccountTokenProvider(EMAIL, "not-a-pem", request=token_endpoint())
    with pytest.raises(GoogleAuthError):
        await provider.get_token()


@pytest.mark.asyncio
async def test_rejected_grant(rsa_private_pem, token_endpoint):
    endpoint = token_endpoint((400, {"error": "invalid_grant", "error_description": "Invalid JWT"}))
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=endpoint)

    with pytest.raises(GoogleAuthError):
        await provider.get_token()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        (200, b"<html>proxy</html>"),
        (200, {"token_type": "Bearer"}),
        (200, {"access_token": "tok", "expires_in": "pronto"}),
    ],
)
async def test_unexpected_token_response_is_auth_error(rsa_private_pem, token_endpoint, response):
    provider = ServiceAccountTokenProvider(EMAIL, rsa_private_pem, request=token_endpoint(response))

    with pytest.raises(GoogleAuthError):
        await provider.get_token()
