# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del backend de checkout.

- PYTHON_ENV=test ANTES de importar la app: get_settings() carga
  EnvTestingSettings (secretos dummy, scheduler apagado).
- Ningún test sale a la red: los adaptadores se prueban con
  httpx.MockTransport y el resto con dobles en memoria.
"""

import os
import pathlib
import sys

import pytest

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
assert (BACKEND_ROOT / "app").exists(), f"'app' no existe en {BACKEND_ROOT}"


@pytest.fixture
def test_settings():
    from app.shared.config.settings_testing import EnvTestingSettings

    return EnvTestingSettings()


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    from app.core.settings import reset_settings_cache

    reset_settings_cache()
    yield
    reset_settings_cache()
