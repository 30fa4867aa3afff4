# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/payment_schemas.py

Esquemas Pydantic de las rutas HTTP de pagos (claves camelCase en el cable).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InitializePaymentRequest(_ApiModel):
    gateway: Optional[str] = Field(default=None, description="paystack | pesapal (default configurado)")
    amount: int = Field(gt=0, description="Monto en unidades menores (30000 = 300.00).")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    description: Optional[str] = None
    reference: Optional[str] = Field(
        default=None,
        min_length=1,
        description="APP-{applicationId}-{timestamp}; se genera si falta y metadata trae applicationId",
    )
    customer_email: str = Field(min_length=3)
    customer_name: Optional[str] = None
    callback_url: Optional[str] = None
    cancel_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class InitializePaymentResponse(_ApiModel):
    success: bool
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    redirect_url: Optional[str] = None
    payment_url: Optional[str] = None
    gateway: Optional[str] = None
    error: Optional[str] = None


class AvailableGatewaysResponse(_ApiModel):
    success: bool = True
    available_gateways: List[str]
    message: str


class VerifyPaymentRequest(_ApiModel):
    reference: str = Field(min_length=1)
    gateway: Optional[str] = None


class VerifyPaymentResponse(_ApiModel):
    success: bool
    status: str
    transaction_id: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    paid_at: Optional[datetime] = None
    error: Optional[str] = None


__all__ = [
    "InitializePaymentRequest",
    "InitializePaymentResponse",
    "AvailableGatewaysResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]

# Fin del archivo backend/app/modules/payments/schemas/payment_schemas.py
