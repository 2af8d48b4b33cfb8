# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Middlewares HTTP compartidos: request id + JSON 500 y log de acceso.
"""

from .exception_handler import JSONExceptionMiddleware, get_request_id
from .request_logging import RequestLoggingMiddleware

__all__ = ["JSONExceptionMiddleware", "RequestLoggingMiddleware", "get_request_id"]
