# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps ISO 8601.

Las pasarelas devuelven fechas en formatos variados ("2026-10-01T10:00:00.000Z",
"2026-10-01T10:00:00", con o sin zona). Aquí se normaliza todo a UTC aware.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from datetime import datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Asegura que un datetime sea UTC timezone-aware (naive se asume UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parsea un timestamp del proveedor a datetime UTC.

    Tolera None, cadenas vacías y formatos no reconocidos (retorna None).

    Examples:
        >>> parse_timestamp("2026-10-01T10:00:00.000Z").isoformat()
        '2026-10-01T10:00:00+00:00'
        >>> parse_timestamp("no-es-fecha") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(dt)


def to_iso8601(dt: Optional[datetime]) -> Optional[str]:
    """
    Convierte datetime a string ISO 8601 con 'Z' para UTC.

    Examples:
        >>> to_iso8601(datetime(2026, 10, 1, 10, 0, tzinfo=timezone.utc))
        '2026-10-01T10:00:00Z'
    """
    if dt is None:
        return None
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


__all__ = ["utcnow", "ensure_utc", "parse_timestamp", "to_iso8601"]

# Fin del archivo backend/app/shared/utils/datetime_helpers.py
