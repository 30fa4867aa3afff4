# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_pesapal.py

IPN endpoint para Pesapal.

Endpoint:
- GET|POST /webhooks/pesapal   (query string, form o JSON)

Pesapal no firma sus IPN: el adaptador confirma el estado consultando
GetTransactionStatus antes de que el reconciliador persista nada.

Respuesta: 200 {"status": "success"} salvo IPN sin OrderTrackingId ni
merchant reference (400).

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
from app.modules.payments.services.webhooks import read_inbound_webhook

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments:webhooks"])


@router.api_route("/pesapal", methods=["GET", "POST"], status_code=status.HTTP_200_OK)
async def pesapal_ipn(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    container: ServiceContainer = Depends(get_container),
) -> Any:
    gateway = PaymentGateway.PESAPAL
    observe_webhook_received(gateway.value)

    inbound = await read_inbound_webhook(request)

    try:
        result = await container.payment_service.handle_webhook(inbound, gateway)
    except UnknownGatewayError:
        logger.error("pesapal_ipn_ignored: gateway not configured")
        observe_webhook_rejected(gateway.value, "gateway_not_configured")
        return {"status": "success"}

    try:
        await container.reconciler.reconcile(session, gateway, result)
    except WebhookPayloadError as e:
        logger.warning("pesapal_ipn_invalid_payload method=%s error=%s", inbound.method, e)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"status": "error", "error": str(e)},
        )

    return {"status": "success"}


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/webhooks_pesapal.py
