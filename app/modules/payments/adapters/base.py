# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/base.py

Contrato común de las pasarelas de pago.

Cada adaptador implementa {initialize, verify, parse_webhook} y traduce el
formato de su proveedor a los tipos canónicos (PaymentInitResult,
CanonicalPaymentStatus, WebhookResult). El orquestador selecciona el
adaptador por identificador; no hay ramas por pasarela fuera de aquí.

Reglas del contrato:
- initialize y parse_webhook nunca lanzan: devuelven un resultado con error.
- verify puede lanzar GatewayError; el orquestador lo convierte en pending.
- Vocabulario desconocido del proveedor -> pending (nunca completed).

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.schemas import (
    CanonicalPaymentStatus,
    PaymentInitParams,
    PaymentInitResult,
    WebhookResult,
)
from app.modules.payments.services.webhooks.inbound import InboundWebhook

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Fallo al hablar con el proveedor (red, HTTP no-2xx, respuesta ilegible)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


def map_provider_status(value: Any, table: Mapping[str, PaymentStatus]) -> PaymentStatus:
    """
    Traduce un estado del proveedor al enum canónico.

    Fail-closed: cualquier valor no reconocido es PENDING.

    Examples:
        >>> map_provider_status("SUCCESS", {"success": PaymentStatus.COMPLETED})
        <PaymentStatus.COMPLETED: 'completed'>
        >>> map_provider_status("weird", {"success": PaymentStatus.COMPLETED})
        <PaymentStatus.PENDING: 'pending'>
    """
    if not isinstance(value, str):
        return PaymentStatus.PENDING
    return table.get(value.strip().lower(), PaymentStatus.PENDING)


class PaymentGatewayAdapter(abc.ABC):
    """Adaptador de una pasarela concreta."""

    gateway: PaymentGateway
    # Header HTTP donde la pasarela envía la firma del webhook (si firma)
    signature_header: Optional[str] = None

    def __init__(self, http_client: httpx.AsyncClient, base_url: str):
        self._client = http_client
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return self.gateway.value

    # ------------------------------------------------------------------
    # Capacidades
    # ------------------------------------------------------------------
    @abc.abstractmethod
    async def initialize(self, params: PaymentInitParams) -> PaymentInitResult:
        """Crea la transacción en el proveedor y devuelve la URL de pago."""

    @abc.abstractmethod
    async def verify(self, reference: str, gateway_reference: Optional[str] = None) -> CanonicalPaymentStatus:
        """Consulta el estado actual; "no encontrado" es pending."""

    @abc.abstractmethod
    async def parse_webhook(self, inbound: InboundWebhook) -> WebhookResult:
        """Autentica y canonicaliza un callback del proveedor."""

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        allow_statuses: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> tuple[int, Dict[str, Any]]:
        """
        Ejecuta un request y devuelve (status_code, json).

        Raises:
            GatewayError: error de transporte, HTTP no-2xx fuera de
                ``allow_statuses`` o body que no es un objeto JSON.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise GatewayError(f"{self.name} request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise GatewayError(f"{self.name} request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            if response.is_success:
                raise GatewayError(
                    f"{self.name} returned a non-JSON body ({response.status_code})",
                    status_code=response.status_code,
                )
            data = {}

        if not response.is_success and response.status_code not in allow_statuses:
            message = data.get("message") or response.reason_phrase or "error"
            raise GatewayError(
                f"{self.name} API error: {response.status_code} {message}",
                status_code=response.status_code,
                payload=data,
            )
        return response.status_code, data


__all__ = ["GatewayError", "PaymentGatewayAdapter", "map_provider_status"]

# Fin del archivo backend/app/modules/payments/adapters/base.py
