# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/pesapal_adapter.py

Adaptador Pesapal (API v3).

API:
- POST /api/Auth/RequestToken                  (token Bearer, cacheado hasta expirar)
- POST /api/URLSetup/RegisterIPN               (una vez, si no hay PESAPAL_IPN_ID)
- POST /api/Transactions/SubmitOrderRequest    (monto en unidades mayores)
- GET  /api/Transactions/GetTransactionStatus?orderTrackingId=...

IPN:
- Legacy: pesapal_merchant_reference, pesapal_transaction_tracking_id, status
- v3:     OrderTrackingId, OrderMerchantReference, OrderNotificationType

Pesapal no firma sus IPN. Con verify_ipn_via_api (default) el estado que
trae la IPN se ignora y se consulta GetTransactionStatus; si esa consulta
falla, el resultado es success=False y no se persiste nada.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.shared.utils.datetime_helpers import parse_timestamp
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.schemas import (
    CanonicalPaymentStatus,
    PaymentInitParams,
    PaymentInitResult,
    WebhookResult,
)
from app.modules.payments.services.currency_service import (
    is_supported,
    normalize_currency,
    to_major_units,
    to_minor_units,
)
from app.modules.payments.services.webhooks.inbound import InboundWebhook
from .base import GatewayError, PaymentGatewayAdapter, map_provider_status

logger = logging.getLogger(__name__)

PESAPAL_STATUS_MAP = {
    "completed": PaymentStatus.COMPLETED,
    "success": PaymentStatus.COMPLETED,
    "failed": PaymentStatus.FAILED,
    "invalid": PaymentStatus.FAILED,
    "cancelled": PaymentStatus.CANCELLED,
    "reversed": PaymentStatus.CANCELLED,
    "pending": PaymentStatus.PENDING,
}

# Margen antes de la expiración real del token
TOKEN_EXPIRY_MARGIN_SECONDS = 60
DEFAULT_TOKEN_TTL_SECONDS = 300


class PesapalAdapter(PaymentGatewayAdapter):
    gateway = PaymentGateway.PESAPAL

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        consumer_key: str,
        consumer_secret: str,
        base_url: str,
        app_base_url: str,
        ipn_id: Optional[str] = None,
        verify_ipn_via_api: bool = True,
        verify_timeout_seconds: float = 8.0,
    ):
        super().__init__(http_client, base_url)
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._app_base_url = app_base_url.rstrip("/")
        self._ipn_id = ipn_id
        self.verify_ipn_via_api = verify_ipn_via_api
        self.verify_timeout_seconds = verify_timeout_seconds
        self._token: Optional[str] = None
        self._token_expires_at: float = 0.0

    @property
    def ipn_url(self) -> str:
        return f"{self._app_base_url}/api/webhooks/pesapal"

    # ------------------------------------------------------------------
    # Autenticación
    # ------------------------------------------------------------------
    def _clear_token(self) -> None:
        self._token = None
        self._token_expires_at = 0.0

    async def _get_access_token(self) -> str:
        if self._token and time.time() < self._token_expires_at:
            return self._token

        _, data = await self._request_json(
            "POST",
            "/api/Auth/RequestToken",
            json={"consumer_key": self._consumer_key, "consumer_secret": self._consumer_secret},
            headers={"Accept": "application/json", "Content-Type": "application/json"},
        )
        token = data.get("token")
        if not token:
            error = data.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else None
            raise GatewayError(f"pesapal authentication failed: {message or data.get('message') or 'no token'}")

        ttl = DEFAULT_TOKEN_TTL_SECONDS
        expiry = parse_timestamp(data.get("expiryDate"))
        if expiry is not None:
            ttl = int(expiry.timestamp() - time.time())
        self._token = token
        self._token_expires_at = time.time() + max(ttl - TOKEN_EXPIRY_MARGIN_SECONDS, 30)
        return token

    async def _auth_headers(self) -> Dict[str, str]:
        token = await self._get_access_token()
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    async def _get_notification_id(self) -> str:
        """IPN id configurado, o registrado una vez contra ipn_url."""
        if self._ipn_id:
            return self._ipn_id

        _, data = await self._request_json(
            "POST",
            "/api/URLSetup/RegisterIPN",
            json={"url": self.ipn_url, "ipn_notification_type": "GET"},
            headers=await self._auth_headers(),
        )
        ipn_id = data.get("ipn_id")
        if not ipn_id:
            raise GatewayError("pesapal IPN registration returned no ipn_id", payload=data)
        logger.info("pesapal_ipn_registered ipn_id=%s url=%s", ipn_id, self.ipn_url)
        self._ipn_id = ipn_id
        return ipn_id

    # ------------------------------------------------------------------
    # initialize
    # ------------------------------------------------------------------
    @staticmethod
    def _split_name(full_name: Optional[str]) -> tuple[str, str]:
        parts = (full_name or "").split()
        first = parts[0] if parts else "Customer"
        last = " ".join(parts[1:]) or "User"
        return first, last

    async def initialize(self, params: PaymentInitParams) -> PaymentInitResult:
        currency = normalize_currency(params.currency)
        if not is_supported(currency):
            return PaymentInitResult.failure(f"Unsupported currency: {currency}", reference=params.reference)

        first_name, last_name = self._split_name(params.customer_name)
        meta = params.metadata
        try:
            order: Dict[str, Any] = {
                "id": params.reference,
                "currency": currency,
                "amount": float(to_major_units(params.amount, currency)),
                "description": (params.description or "Application Fee Payment")[:100],
                "callback_url": params.callback_url or f"{self._app_base_url}/payment/callback",
                "notification_id": await self._get_notification_id(),
                "billing_address": {
                    "email_address": params.customer_email,
                    "phone_number": meta.get("phone", ""),
                    "country_code": meta.get("country", "KE"),
                    "first_name": first_name,
                    "last_name": last_name,
                    "line_1": meta.get("address", ""),
                    "city": meta.get("city", ""),
                },
            }
            if params.cancel_url:
                order["cancellation_url"] = params.cancel_url

            _, data = await self._request_json(
                "POST",
                "/api/Transactions/SubmitOrderRequest",
                json=order,
                headers=await self._auth_headers(),
            )
        except GatewayError as e:
            if e.status_code == 401:
                self._clear_token()
            logger.warning("pesapal_initialize_failed reference=%s error=%s", params.reference, e)
            return PaymentInitResult.failure(str(e), reference=params.reference, raw=e.payload or None)

        redirect_url = data.get("redirect_url")
        if data.get("error") or not redirect_url:
            error = data.get("error") if isinstance(data.get("error"), dict) else {}
            return PaymentInitResult.failure(
                error.get("message") or data.get("message") or "Failed to get payment URL from Pesapal",
                reference=params.reference,
                raw=data,
            )

        return PaymentInitResult(
            success=True,
            transaction_id=params.reference,
            reference=data.get("merchant_reference") or params.reference,
            redirect_url=redirect_url,
            payment_url=redirect_url,
            gateway_reference=data.get("order_tracking_id"),
            raw=data,
        )

    # ------------------------------------------------------------------
    # verify
    # ------------------------------------------------------------------
    async def verify(self, reference: str, gateway_reference: Optional[str] = None) -> CanonicalPaymentStatus:
        """``gateway_reference`` es el OrderTrackingId; sin él se usa ``reference``."""
        tracking_id = gateway_reference or reference
        try:
            _, data = await self._request_json(
                "GET",
                "/api/Transactions/GetTransactionStatus",
                params={"orderTrackingId": tracking_id},
                headers=await self._auth_headers(),
                allow_statuses=(404,),
            )
        except GatewayError as e:
            if e.status_code == 401:
                self._clear_token()
            raise

        description = data.get("payment_status_description")
        if not description:
            # Pesapal aún no conoce la orden
            error = data.get("error") if isinstance(data.get("error"), dict) else {}
            return CanonicalPaymentStatus.pending(reference, error=error.get("message"))

        status = map_provider_status(description, PESAPAL_STATUS_MAP)
        currency = data.get("currency")
        amount = data.get("amount")
        return CanonicalPaymentStatus(
            status=status,
            transaction_id=data.get("merchant_reference") or reference,
            reference=data.get("merchant_reference") or reference,
            amount=to_minor_units(amount, currency or "") if amount is not None else None,
            currency=currency,
            paid_at=parse_timestamp(data.get("created_date")) if status is PaymentStatus.COMPLETED else None,
            gateway_reference=data.get("order_tracking_id") or tracking_id,
            raw=data,
        )

    # ------------------------------------------------------------------
    # IPN
    # ------------------------------------------------------------------
    async def parse_webhook(self, inbound: InboundWebhook) -> WebhookResult:
        reference = inbound.get("OrderMerchantReference", "pesapal_merchant_reference", "orderMerchantReference")
        tracking_id = inbound.get("OrderTrackingId", "pesapal_transaction_tracking_id", "orderTrackingId")
        fields = dict(inbound.fields)

        if not reference and not tracking_id:
            # Sin correlación: el reconciliador lo trata como payload inválido
            return WebhookResult(success=True, status=PaymentStatus.PENDING, raw=fields)

        if not self.verify_ipn_via_api:
            status = map_provider_status(inbound.get("status"), PESAPAL_STATUS_MAP)
            return WebhookResult(
                success=True,
                transaction_id=reference,
                gateway_reference=tracking_id,
                status=status,
                should_update_database=status.is_terminal,
                raw=fields,
            )

        if not tracking_id:
            logger.warning("pesapal_ipn_unverifiable reference=%s: missing tracking id", reference)
            return WebhookResult.rejected("verification_failed: missing OrderTrackingId", transaction_id=reference)

        try:
            verified = await asyncio.wait_for(
                self.verify(reference or tracking_id, gateway_reference=tracking_id),
                timeout=self.verify_timeout_seconds,
            )
        except (GatewayError, asyncio.TimeoutError) as e:
            logger.warning("pesapal_ipn_verification_failed tracking_id=%s error=%r", tracking_id, e)
            return WebhookResult.rejected(f"verification_failed: {e!r}", transaction_id=reference)

        if reference and verified.reference and verified.reference != reference:
            logger.warning(
                "pesapal_ipn_reference_mismatch ipn=%s provider=%s tracking_id=%s",
                reference, verified.reference, tracking_id,
            )
            return WebhookResult.rejected("verification_failed: merchant reference mismatch", transaction_id=reference)

        fields["verified_status"] = verified.raw or {}
        return WebhookResult(
            success=True,
            transaction_id=verified.reference or reference,
            gateway_reference=tracking_id,
            status=verified.status,
            should_update_database=verified.status.is_terminal,
            paid_at=verified.paid_at,
            raw=fields,
        )


__all__ = ["PesapalAdapter", "PESAPAL_STATUS_MAP"]

# Fin del archivo backend/app/modules/payments/adapters/pesapal_adapter.py
