# -*- coding: utf-8 -*-
"""
backend/tests/shared/test_internal_auth.py

Autor: Tienda Backend
Fecha: 2026-10-19
"""
import pytest
from fastapi import HTTPException

from app.shared.internal_auth import parse_bearer_token, verify_bearer_token


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc", "abc"),
        ("bearer abc", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer a b", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_bearer_token(header, expected):
    assert parse_bearer_token(header) == expected


def test_valid_token_passes():
    verify_bearer_token("Bearer s3cret", "s3cret")


@pytest.mark.parametrize("header", [None, "Bearer wrong", "s3cret", "Token s3cret"])
def test_invalid_tokens_are_401(header):
    with pytest.raises(HTTPException) as exc:
        verify_bearer_token(header, "s3cret")
    assert exc.value.status_code == 401
    assert exc.value.detail == "Unauthorized"
    assert exc.value.headers == {"WWW-Authenticate": "Bearer"}


@pytest.mark.parametrize("expected", [None, ""])
def test_fail_closed_without_configured_token(expected):
    with pytest.raises(HTTPException) as exc:
        verify_bearer_token("Bearer anything", expected)
    assert exc.value.status_code == 401
