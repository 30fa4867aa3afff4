# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades comunes: fechas UTC y respuestas JSON.
"""

from .datetime_helpers import ensure_utc, parse_timestamp, to_iso8601, utcnow
from .json_response import UTF8JSONResponse

__all__ = ["UTF8JSONResponse", "ensure_utc", "parse_timestamp", "to_iso8601", "utcnow"]
