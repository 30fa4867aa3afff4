# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/references.py

Convención de transaction ids: APP-{applicationId}-{timestamp}.

Permite recuperar la solicitud dueña de un pago cuando el payload del
proveedor no trae una referencia explícita a la solicitud.
"""

from __future__ import annotations

import time
from typing import Any, Mapping, Optional

REFERENCE_PREFIX = "APP"


def build_transaction_id(application_id: int, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{REFERENCE_PREFIX}-{application_id}-{timestamp_ms}"


def parse_application_id(reference: Optional[str]) -> Optional[int]:
    """
    Extrae el application id (segundo segmento separado por '-').

    >>> parse_application_id("APP-123-1700000000000")
    123
    """
    if not reference:
        return None
    parts = reference.split("-")
    if len(parts) < 2:
        return None
    try:
        value = int(parts[1])
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_application_id(
    metadata: Optional[Mapping[str, Any]],
    reference: Optional[str],
) -> Optional[int]:
    """metadata.application_id (o applicationId) tiene prioridad sobre la referencia."""
    if metadata:
        raw = metadata.get("application_id", metadata.get("applicationId"))
        if raw is not None:
            try:
                value = int(raw)
            except (TypeError, ValueError):
                return None
            return value if value > 0 else None
    return parse_application_id(reference)


__all__ = ["build_transaction_id", "parse_application_id", "resolve_application_id"]
