# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito.

Los mensajes al comprador y al operador llevan japonés/español; sin el
charset algunos proxies los muestran como mojibake.

    app = FastAPI(default_response_class=UTF8JSONResponse)
    return error_response("La cesta está vacía", status_code=400)

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    return UTF8JSONResponse(content=content, status_code=status_code, headers=headers)


def error_response(message: str, status_code: int) -> UTF8JSONResponse:
    """Cuerpo {"error": message}, el contrato de errores de la API pública."""
    return json_response_utf8({"error": message}, status_code=status_code)


__all__ = ["UTF8JSONResponse", "error_response", "json_response_utf8"]
