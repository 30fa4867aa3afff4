# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Última red para excepciones no manejadas.

Responde 500 con el mismo contrato que el resto de la API
({"success": false, "error": ...}) más el request_id, para que el
frontend y los logs puedan correlacionar el fallo. Los webhooks que
terminan aquí reciben 500 y el proveedor los reintenta.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
# Orden de preferencia: propio, luego el del proxy
_INBOUND_ID_HEADERS = ("x-request-id", "x-correlation-id")


def get_request_id(request: Request) -> str:
    """request_id recibido del proxy o uno nuevo de 16 hex."""
    for header in _INBOUND_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value[:64]
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id, request.method, request.url.path, e,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Internal server error",
                    "requestId": request_id,
                },
                headers={REQUEST_ID_HEADER: request_id},
            )

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response


__all__ = ["JSONExceptionMiddleware", "REQUEST_ID_HEADER", "get_request_id"]

# Fin del archivo backend/app/shared/middleware/exception_handler.py
