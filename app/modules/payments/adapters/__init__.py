# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/__init__.py

Adaptadores de pasarela y construcción del registro por identificador.
"""

from __future__ import annotations

import logging
from typing import Dict

import httpx

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.payments.enums import PaymentGateway
from .base import GatewayError, PaymentGatewayAdapter, map_provider_status
from .paystack_adapter import PaystackAdapter
from .pesapal_adapter import PesapalAdapter

logger = logging.getLogger(__name__)


def build_gateway_registry(
    settings: PaymentsSettings,
    http_client: httpx.AsyncClient,
    app_base_url: str,
) -> Dict[PaymentGateway, PaymentGatewayAdapter]:
    """
    Registra solo las pasarelas con credenciales completas.
    """
    registry: Dict[PaymentGateway, PaymentGatewayAdapter] = {}

    if settings.paystack_configured:
        registry[PaymentGateway.PAYSTACK] = PaystackAdapter(
            http_client,
            secret_key=settings.paystack_secret_key,
            base_url=settings.paystack_base_url,
            environment=settings.paystack_environment,
            require_signature=settings.paystack_require_signature,
        )
        logger.info("Paystack gateway registered (%s mode)", settings.paystack_environment)
    else:
        logger.warning("Paystack credentials not found; configure PAYSTACK_SECRET_KEY to enable it")

    if settings.pesapal_configured:
        registry[PaymentGateway.PESAPAL] = PesapalAdapter(
            http_client,
            consumer_key=settings.pesapal_consumer_key,
            consumer_secret=settings.pesapal_consumer_secret,
            base_url=settings.pesapal_base_url,
            app_base_url=app_base_url,
            ipn_id=settings.pesapal_ipn_id,
            verify_ipn_via_api=settings.pesapal_verify_ipn_via_api,
            verify_timeout_seconds=settings.payments_gateway_call_timeout_seconds,
        )
        logger.info("Pesapal gateway registered (%s)", settings.pesapal_environment)
    else:
        logger.warning(
            "Pesapal credentials not found; configure PESAPAL_CONSUMER_KEY and "
            "PESAPAL_CONSUMER_SECRET to enable it"
        )

    return registry


__all__ = [
    "GatewayError",
    "PaymentGatewayAdapter",
    "PaystackAdapter",
    "PesapalAdapter",
    "build_gateway_registry",
    "map_provider_status",
]
