# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/inbound.py

Lectura de callbacks entrantes (webhook / IPN) en forma neutral.

Las pasarelas entregan el mismo evento por varias vías: POST JSON,
POST form-urlencoded o GET con query string. Aquí se unifican en un
InboundWebhook que conserva el body crudo (necesario para el HMAC).

Autor: LoanIntake
Fecha: 2026-09-30
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from starlette.requests import Request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InboundWebhook:
    """Callback entrante tal como llegó, más sus campos aplanados."""

    raw_body: bytes = b""
    fields: Dict[str, Any] = field(default_factory=dict)
    signature: Optional[str] = None
    content_type: str = ""
    method: str = "POST"

    def get(self, *names: str) -> Any:
        """Primer valor no vacío entre varios nombres de campo."""
        for name in names:
            value = self.fields.get(name)
            if value not in (None, ""):
                return value
        return None


def parse_body(raw_body: bytes, content_type: str = "") -> Dict[str, Any]:
    """
    Decodifica JSON o form-urlencoded; un body vacío o ilegible produce {}.
    """
    if not raw_body:
        return {}
    text = raw_body.decode("utf-8", errors="replace").strip()
    if "json" in content_type or text.startswith("{"):
        try:
            data = json.loads(text)
        except ValueError:
            logger.warning("webhook_body_invalid_json content_type=%s", content_type)
            return {}
        return data if isinstance(data, dict) else {}
    return dict(parse_qsl(text, keep_blank_values=False))


async def read_inbound_webhook(
    request: Request,
    signature_header: Optional[str] = None,
) -> InboundWebhook:
    """
    Construye un InboundWebhook desde el request.

    Los campos del body tienen prioridad sobre los de la query string.
    """
    raw_body = await request.body()
    content_type = request.headers.get("content-type", "").lower()

    fields: Dict[str, Any] = dict(request.query_params)
    fields.update(parse_body(raw_body, content_type))

    signature = request.headers.get(signature_header) if signature_header else None
    return InboundWebhook(
        raw_body=raw_body,
        fields=fields,
        signature=signature,
        content_type=content_type,
        method=request.method,
    )


__all__ = ["InboundWebhook", "parse_body", "read_inbound_webhook"]
