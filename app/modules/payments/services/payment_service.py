# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/payment_service.py

Orquestador de pagos.

Selecciona el adaptador registrado para una pasarela y normaliza sus
resultados. No persiste nada: el alta del PaymentRecord la hace la ruta
y las transiciones de estado el reconciliador.

Flujos cubiertos:
- Pasarelas disponibles
- initialize_payment (UnknownGatewayError si la pasarela no está registrada)
- verify_payment (cualquier error o timeout -> pending)
- handle_webhook (cualquier error -> success=False)

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Mapping, Optional

from app.modules.payments.adapters.base import PaymentGatewayAdapter
from app.modules.payments.enums import PaymentGateway
from app.modules.payments.schemas import (
    CanonicalPaymentStatus,
    PaymentInitParams,
    PaymentInitResult,
    WebhookResult,
)
from app.modules.payments.services.webhooks.inbound import InboundWebhook

logger = logging.getLogger(__name__)


class UnknownGatewayError(LookupError):
    """La pasarela pedida no existe o no está configurada."""

    def __init__(self, gateway: object, available: List[str]):
        self.gateway = gateway
        self.available = available
        super().__init__(
            f"Payment gateway '{gateway}' not found or not configured "
            f"(available: {', '.join(available) or 'none'})"
        )


class PaymentService:
    """
    Orquestador sobre un registro {PaymentGateway -> adaptador}.
    """

    def __init__(
        self,
        adapters: Mapping[PaymentGateway, PaymentGatewayAdapter],
        *,
        default_gateway: Optional[str] = None,
        call_timeout_seconds: float = 8.0,
        webhook_timeout_seconds: float = 15.0,
    ) -> None:
        self._adapters: Dict[PaymentGateway, PaymentGatewayAdapter] = dict(adapters)
        self.default_gateway = PaymentGateway.parse(default_gateway) or PaymentGateway.PAYSTACK
        self.call_timeout_seconds = call_timeout_seconds
        self.webhook_timeout_seconds = webhook_timeout_seconds

    # ------------------------------------------------------------------ #
    # Registro
    # ------------------------------------------------------------------ #
    def get_available_gateways(self) -> List[str]:
        return [g.value for g in self._adapters]

    def resolve_gateway(self, gateway_id: Optional[object] = None) -> PaymentGateway:
        """Identificador libre (o None = default) -> PaymentGateway registrada."""
        raw = gateway_id if gateway_id not in (None, "") else self.default_gateway
        gateway = PaymentGateway.parse(raw)
        if gateway is None or gateway not in self._adapters:
            logger.warning("unknown_gateway requested=%r available=%s", raw, self.get_available_gateways())
            raise UnknownGatewayError(raw, self.get_available_gateways())
        return gateway

    def get_adapter(self, gateway_id: Optional[object] = None) -> PaymentGatewayAdapter:
        return self._adapters[self.resolve_gateway(gateway_id)]

    # ------------------------------------------------------------------ #
    # Operaciones
    # ------------------------------------------------------------------ #
    async def initialize_payment(
        self,
        params: PaymentInitParams,
        gateway_id: Optional[object] = None,
    ) -> PaymentInitResult:
        adapter = self.get_adapter(gateway_id)
        logger.info(
            "payment_initialize gateway=%s reference=%s amount=%s currency=%s",
            adapter.name, params.reference, params.amount, params.currency,
        )
        try:
            result = await asyncio.wait_for(adapter.initialize(params), timeout=self.call_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("payment_initialize_timeout gateway=%s reference=%s", adapter.name, params.reference)
            return PaymentInitResult.failure("Payment gateway timed out", reference=params.reference)

        if result.success and not result.checkout_url:
            # Contrato: éxito implica destino de redirección
            return PaymentInitResult.failure(
                "Payment gateway returned no redirect URL",
                reference=params.reference,
                raw=result.raw,
            )
        return result

    async def verify_payment(
        self,
        reference: str,
        gateway_id: Optional[object] = None,
        *,
        gateway_reference: Optional[str] = None,
    ) -> CanonicalPaymentStatus:
        """
        Nunca lanza por fallos del proveedor: error o timeout -> pending.

        Raises:
            UnknownGatewayError: la pasarela no está registrada
        """
        adapter = self.get_adapter(gateway_id)
        logger.info("payment_verify gateway=%s reference=%s", adapter.name, reference)
        try:
            return await asyncio.wait_for(
                adapter.verify(reference, gateway_reference=gateway_reference),
                timeout=self.call_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("payment_verify_timeout gateway=%s reference=%s", adapter.name, reference)
            return CanonicalPaymentStatus.pending(reference, error="Payment verification timed out")
        except Exception as e:
            logger.warning("payment_verify_error gateway=%s reference=%s error=%r", adapter.name, reference, e)
            return CanonicalPaymentStatus.pending(reference, error=str(e) or type(e).__name__)

    async def handle_webhook(
        self,
        inbound: InboundWebhook,
        gateway_id: object,
    ) -> WebhookResult:
        adapter = self.get_adapter(gateway_id)
        try:
            return await asyncio.wait_for(adapter.parse_webhook(inbound), timeout=self.webhook_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("webhook_parse_timeout gateway=%s", adapter.name)
            return WebhookResult.rejected("webhook processing timed out")
        except Exception as e:
            logger.exception("webhook_parse_error gateway=%s", adapter.name)
            return WebhookResult.rejected(f"webhook handling failed: {e!r}")


__all__ = ["PaymentService", "UnknownGatewayError"]

# Fin del archivo backend/app/modules/payments/services/payment_service.py
