# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

JSONResponse con charset UTF-8 explícito.

Uso:

    app = FastAPI(default_response_class=UTF8JSONResponse)

Los nombres de cliente (p. ej. "Ñandú Kamau") en payloads de pago se
devuelven sin mojibake aunque el proxy no asuma UTF-8.
"""

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


__all__ = ["UTF8JSONResponse"]
