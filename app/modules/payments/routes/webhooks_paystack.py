# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_paystack.py

Webhook endpoint para Paystack.

Endpoint:
- POST /webhooks/paystack   (JSON o form, header x-paystack-signature)

Respuesta: 200 {"success": true} salvo payload estructuralmente inválido
(400). Una firma inválida o ausente no persiste nada pero sigue siendo 200.

Autor: LoanIntake
Fecha: 2026-10-02
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ServiceContainer, get_container
from app.shared.database.database import get_async_session
from app.modules.payments.enums import PaymentGateway
from app.modules.payments.facades.webhooks.reconciler import WebhookPayloadError
from app.modules.payments.metrics import observe_webhook_received, observe_webhook_rejected
from app.modules.payments.services.payment_service import UnknownGatewayError
from app.modules.payments.services.webhooks import PAYSTACK_SIGNATURE_HEADER, read_inbound_webhook

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments:webhooks"])


@router.post("/paystack", status_code=status.HTTP_200_OK)
async def paystack_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    container: ServiceContainer = Depends(get_container),
) -> Any:
    gateway = PaymentGateway.PAYSTACK
    observe_webhook_received(gateway.value)

    inbound = await read_inbound_webhook(request, signature_header=PAYSTACK_SIGNATURE_HEADER)

    try:
        result = await container.payment_service.handle_webhook(inbound, gateway)
    except UnknownGatewayError:
        logger.error("paystack_webhook_ignored: gateway not configured")
        observe_webhook_rejected(gateway.value, "gateway_not_configured")
        return {"success": True}

    try:
        await container.reconciler.reconcile(session, gateway, result)
    except WebhookPayloadError as e:
        logger.warning("paystack_webhook_invalid_payload error=%s", e)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(e)},
        )

    return {"success": True}


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/webhooks_paystack.py
