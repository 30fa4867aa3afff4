# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/paystack_adapter.py

Adaptador Paystack.

API:
- POST /transaction/initialize        (Bearer secret key, monto en unidades menores)
- GET  /transaction/verify/{reference}

Webhooks:
- Eventos ``charge.success`` / ``charge.failed`` con ``data.reference``.
- Forma plana ``{reference, status}`` (JSON o form-urlencoded).
- Firma: HMAC-SHA512 del body crudo en ``x-paystack-signature``.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from app.shared.utils.datetime_helpers import parse_timestamp
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.schemas import (
    CanonicalPaymentStatus,
    PaymentInitParams,
    PaymentInitResult,
    WebhookResult,
)
from app.modules.payments.services.currency_service import is_supported, normalize_currency
from app.modules.payments.services.webhooks.inbound import InboundWebhook
from app.modules.payments.services.webhooks.signature_verification import (
    PAYSTACK_SIGNATURE_HEADER,
    verify_paystack_signature,
)
from .base import GatewayError, PaymentGatewayAdapter, map_provider_status

logger = logging.getLogger(__name__)

PAYSTACK_STATUS_MAP = {
    "success": PaymentStatus.COMPLETED,
    "failed": PaymentStatus.FAILED,
    "abandoned": PaymentStatus.CANCELLED,
    "reversed": PaymentStatus.CANCELLED,
    "pending": PaymentStatus.PENDING,
    "ongoing": PaymentStatus.PENDING,
    "processing": PaymentStatus.PENDING,
}

PAYSTACK_EVENT_MAP = {
    "charge.success": PaymentStatus.COMPLETED,
    "charge.failed": PaymentStatus.FAILED,
}


class PaystackAdapter(PaymentGatewayAdapter):
    gateway = PaymentGateway.PAYSTACK
    signature_header = PAYSTACK_SIGNATURE_HEADER

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        secret_key: str,
        base_url: str = "https://api.paystack.co",
        environment: str = "test",
        require_signature: bool = True,
    ):
        super().__init__(http_client, base_url)
        self._secret_key = secret_key
        self.environment = environment
        self.require_signature = require_signature

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._secret_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    # ------------------------------------------------------------------
    # initialize
    # ------------------------------------------------------------------
    async def initialize(self, params: PaymentInitParams) -> PaymentInitResult:
        currency = normalize_currency(params.currency)
        if not is_supported(currency):
            return PaymentInitResult.failure(f"Unsupported currency: {currency}", reference=params.reference)

        application_id = params.metadata.get("application_id", "")
        body: Dict[str, Any] = {
            "email": params.customer_email,
            "amount": params.amount,
            "currency": currency,
            "reference": params.reference,
            "metadata": {
                "application_id": application_id,
                "custom_fields": [
                    {
                        "display_name": "Customer Name",
                        "variable_name": "customer_name",
                        "value": params.customer_name or "",
                    },
                    {
                        "display_name": "Application ID",
                        "variable_name": "application_id",
                        "value": str(application_id),
                    },
                ],
            },
        }
        if params.callback_url:
            body["callback_url"] = params.callback_url
        if params.cancel_url:
            body["metadata"]["cancel_action"] = params.cancel_url

        try:
            _, data = await self._request_json(
                "POST", "/transaction/initialize", json=body, headers=self._headers()
            )
        except GatewayError as e:
            logger.warning("paystack_initialize_failed reference=%s error=%s", params.reference, e)
            return PaymentInitResult.failure(str(e), reference=params.reference, raw=e.payload or None)

        payload = data.get("data") or {}
        if not data.get("status") or not payload.get("authorization_url"):
            return PaymentInitResult.failure(
                data.get("message") or "Payment initialization failed",
                reference=params.reference,
                raw=data,
            )

        reference = payload.get("reference") or params.reference
        return PaymentInitResult(
            success=True,
            transaction_id=reference,
            reference=reference,
            redirect_url=payload["authorization_url"],
            gateway_reference=payload.get("access_code"),
            raw=data,
        )

    # ------------------------------------------------------------------
    # verify
    # ------------------------------------------------------------------
    async def verify(self, reference: str, gateway_reference: Optional[str] = None) -> CanonicalPaymentStatus:
        status_code, data = await self._request_json(
            "GET",
            f"/transaction/verify/{quote(reference, safe='')}",
            headers=self._headers(),
            allow_statuses=(400, 404),
        )
        if status_code in (400, 404) or not data.get("status"):
            # Referencia aún no conocida por Paystack
            return CanonicalPaymentStatus.pending(reference, error=data.get("message"))

        payload = data.get("data") or {}
        status = map_provider_status(payload.get("status"), PAYSTACK_STATUS_MAP)
        amount = payload.get("amount")
        return CanonicalPaymentStatus(
            status=status,
            transaction_id=reference,
            reference=payload.get("reference") or reference,
            amount=int(amount) if amount is not None else None,
            currency=payload.get("currency"),
            paid_at=parse_timestamp(payload.get("paid_at") or payload.get("paidAt")),
            gateway_reference=str(payload["id"]) if payload.get("id") is not None else None,
            raw=data,
        )

    # ------------------------------------------------------------------
    # webhooks
    # ------------------------------------------------------------------
    def _authenticate(self, inbound: InboundWebhook) -> Optional[str]:
        """Devuelve el motivo de rechazo, o None si el callback es auténtico."""
        if inbound.signature:
            if not verify_paystack_signature(inbound.raw_body, inbound.signature, self._secret_key):
                return "invalid_signature"
            return None
        if self.require_signature:
            logger.warning("Paystack webhook rechazado: firma requerida y ausente")
            return "missing_signature"
        return None

    async def parse_webhook(self, inbound: InboundWebhook) -> WebhookResult:
        fields = inbound.fields
        data = fields.get("data") if isinstance(fields.get("data"), dict) else {}
        reference = data.get("reference") or inbound.get("reference", "trxref")

        reason = self._authenticate(inbound)
        if reason is not None:
            return WebhookResult.rejected(reason, transaction_id=reference)

        event = fields.get("event")
        if event:
            status = PAYSTACK_EVENT_MAP.get(str(event).lower())
            paid_at = parse_timestamp(data.get("paid_at") or data.get("paidAt"))
        else:
            status = map_provider_status(inbound.get("status"), PAYSTACK_STATUS_MAP)
            paid_at = parse_timestamp(inbound.get("paid_at"))

        if status is None:
            # Evento informativo (transfer.*, subscription.*, ...): sin estado de pago
            return WebhookResult(
                success=True,
                transaction_id=reference,
                status=None,
                should_update_database=False,
                raw=fields,
            )

        return WebhookResult(
            success=True,
            transaction_id=reference,
            status=status,
            should_update_database=status.is_terminal,
            paid_at=paid_at,
            raw=fields,
        )


__all__ = ["PaystackAdapter", "PAYSTACK_STATUS_MAP", "PAYSTACK_EVENT_MAP"]

# Fin del archivo backend/app/modules/payments/adapters/paystack_adapter.py
