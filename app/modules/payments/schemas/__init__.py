# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/__init__.py

Esquemas Pydantic del módulo Payments.
"""

from .gateway_schemas import (
    PaymentInitParams,
    PaymentInitResult,
    CanonicalPaymentStatus,
    WebhookResult,
)
from .payment_schemas import (
    InitializePaymentRequest,
    InitializePaymentResponse,
    AvailableGatewaysResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)

__all__ = [
    "PaymentInitParams",
    "PaymentInitResult",
    "CanonicalPaymentStatus",
    "WebhookResult",
    "InitializePaymentRequest",
    "InitializePaymentResponse",
    "AvailableGatewaysResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
