# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/gateway_schemas.py

Tipos canónicos que intercambian las pasarelas y el orquestador.

Cada adaptador traduce su formato de cable a estos modelos; el resto del
sistema (orquestador, reconciliador, rutas) solo conoce estos tipos.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.payments.enums import PaymentStatus


class _CanonicalModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class PaymentInitParams(_CanonicalModel):
    """Solicitud canónica de inicialización (monto en unidades menores)."""

    amount: int = Field(gt=0, description="Monto en unidades menores.")
    currency: str = Field(min_length=3, max_length=3)
    reference: str = Field(min_length=1, description="APP-{applicationId}-{timestamp}")
    customer_email: str = Field(min_length=3)
    customer_name: Optional[str] = None
    description: Optional[str] = None
    callback_url: Optional[str] = None
    cancel_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PaymentInitResult(_CanonicalModel):
    """
    Resultado de initialize.

    Con success=True siempre hay redirect_url o payment_url; con
    success=False siempre hay error.
    """

    success: bool
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    redirect_url: Optional[str] = None
    payment_url: Optional[str] = None
    # Correlación secundaria (OrderTrackingId en Pesapal, access_code en Paystack)
    gateway_reference: Optional[str] = None
    error: Optional[str] = None
    raw: Optional[Dict[str, Any]] = Field(default=None, exclude=True)

    @classmethod
    def failure(cls, error: str, reference: Optional[str] = None, raw: Optional[Dict[str, Any]] = None) -> "PaymentInitResult":
        return cls(success=False, error=error, reference=reference, raw=raw)

    @property
    def checkout_url(self) -> Optional[str]:
        return self.redirect_url or self.payment_url


class CanonicalPaymentStatus(_CanonicalModel):
    """Estado de un pago en vocabulario canónico, independiente de la pasarela."""

    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    amount: Optional[int] = Field(default=None, description="Unidades menores.")
    currency: Optional[str] = None
    paid_at: Optional[datetime] = None
    gateway_reference: Optional[str] = None
    error: Optional[str] = None
    raw: Optional[Dict[str, Any]] = Field(default=None, exclude=True)

    @classmethod
    def pending(cls, reference: Optional[str], error: Optional[str] = None) -> "CanonicalPaymentStatus":
        return cls(status=PaymentStatus.PENDING, transaction_id=reference, reference=reference, error=error)


class WebhookResult(_CanonicalModel):
    """
    Resultado de parse_webhook.

    - success=False: no autenticado o no verificable; no se persiste nada.
    - should_update_database=False: se acusa recibo sin persistir.
    """

    success: bool
    transaction_id: Optional[str] = None
    gateway_reference: Optional[str] = None
    status: Optional[PaymentStatus] = None
    should_update_database: bool = False
    paid_at: Optional[datetime] = None
    error: Optional[str] = None
    raw: Optional[Dict[str, Any]] = Field(default=None, exclude=True)

    @classmethod
    def rejected(cls, error: str, transaction_id: Optional[str] = None) -> "WebhookResult":
        return cls(success=False, error=error, transaction_id=transaction_id)

    @property
    def has_correlation(self) -> bool:
        return bool(self.transaction_id or self.gateway_reference)


__all__ = [
    "PaymentInitParams",
    "PaymentInitResult",
    "CanonicalPaymentStatus",
    "WebhookResult",
]

# Fin del archivo backend/app/modules/payments/schemas/gateway_schemas.py
