# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Middlewares HTTP compartidos (registrados en app.main).
"""

from .exception_handler import REQUEST_ID_HEADER, JSONExceptionMiddleware, get_request_id
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "JSONExceptionMiddleware",
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "get_request_id",
]
