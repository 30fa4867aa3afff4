# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/request_logging.py

Una línea de log por request: método, ruta, status y duración.
5xx se registra como error y 4xx como warning; /metrics y /health se omiten.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .exception_handler import get_request_id

logger = logging.getLogger(__name__)

DEFAULT_SKIP_PREFIXES = ("/metrics", "/health")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, skip_prefixes: Iterable[str] = DEFAULT_SKIP_PREFIXES):
        super().__init__(app)
        self.skip_prefixes = tuple(skip_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path.startswith(self.skip_prefixes):
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None) or get_request_id(request)
        request.state.request_id = request_id

        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.log(
                _level_for(status),
                "request_completed request_id=%s method=%s path=%s status=%d duration_ms=%.2f",
                request_id, request.method, path, status, (time.perf_counter() - start) * 1000,
            )


__all__ = ["RequestLoggingMiddleware"]

# Fin del archivo backend/app/shared/middleware/request_logging.py
