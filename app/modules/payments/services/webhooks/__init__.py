# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/__init__.py

Utilidades de entrada de webhooks: lectura del callback y verificación de firma.
"""

from .inbound import InboundWebhook, parse_body, read_inbound_webhook
from .signature_verification import (
    PAYSTACK_SIGNATURE_HEADER,
    compute_paystack_signature,
    verify_paystack_signature,
)

__all__ = [
    "InboundWebhook",
    "parse_body",
    "read_inbound_webhook",
    "PAYSTACK_SIGNATURE_HEADER",
    "compute_paystack_signature",
    "verify_paystack_signature",
]
