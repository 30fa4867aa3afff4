# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/payments.py

Endpoints de pago iniciados por el usuario.

Endpoints:
- GET  /payments/initialize   pasarelas disponibles
- POST /payments/initialize   crea la sesión de pago y el PaymentRecord pending
- POST /payments/verify       consulta el estado en el proveedor

Autor: LoanIntake
Fecha: 2026-10-02
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ServiceContainer, get_container
from app.shared.auth_context import get_current_user_id
from app.shared.database.database import get_async_session
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.metrics import observe_payment_initialized, observe_payment_verified
from app.modules.payments.models.payment_record_models import PaymentRecord
from app.modules.payments.schemas import (
    AvailableGatewaysResponse,
    InitializePaymentRequest,
    InitializePaymentResponse,
    PaymentInitParams,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.modules.payments.services.currency_service import format_amount, is_supported, normalize_currency
from app.modules.payments.services.payment_service import UnknownGatewayError
from app.modules.payments.services.references import (
    build_transaction_id,
    parse_application_id,
    resolve_application_id,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=body)


@router.get(
    "/initialize",
    response_model=AvailableGatewaysResponse,
    summary="Pasarelas de pago disponibles",
)
async def get_available_gateways(
    container: ServiceContainer = Depends(get_container),
) -> AvailableGatewaysResponse:
    gateways = container.payment_service.get_available_gateways()
    message = "Payment gateways available" if gateways else "No payment gateways configured"
    return AvailableGatewaysResponse(success=True, available_gateways=gateways, message=message)


@router.post(
    "/initialize",
    response_model=InitializePaymentResponse,
    response_model_exclude_none=True,
    summary="Inicializa un pago para una solicitud del usuario",
)
async def initialize_payment(
    body: InitializePaymentRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    container: ServiceContainer = Depends(get_container),
):
    """
    Flujo:
    1. Resuelve la solicitud (metadata.application_id o APP-{id}-{ts})
    2. Verifica propiedad de la solicitud
    3. Delega en el orquestador
    4. Persiste el PaymentRecord pending (responsabilidad de este handler)
    """
    service = container.payment_service

    application_id = resolve_application_id(body.metadata, body.reference)
    if application_id is None:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing or invalid application reference")

    currency = normalize_currency(body.currency)
    if not is_supported(currency):
        return _error(status.HTTP_400_BAD_REQUEST, f"Unsupported currency: {body.currency}")

    try:
        gateway = service.resolve_gateway(body.gateway)
    except UnknownGatewayError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    application = await container.application_repo.get_owned(session, application_id, user_id)
    if application is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    reference = body.reference or build_transaction_id(application_id)
    metadata = dict(body.metadata)
    metadata.setdefault("application_id", application_id)
    params = PaymentInitParams(
        amount=body.amount,
        currency=currency,
        reference=reference,
        customer_email=body.customer_email,
        customer_name=body.customer_name,
        description=body.description,
        callback_url=body.callback_url,
        cancel_url=body.cancel_url,
        metadata=metadata,
    )

    result = await service.initialize_payment(params, gateway)
    if not result.success:
        observe_payment_initialized(gateway.value, "failure")
        return _error(
            status.HTTP_400_BAD_REQUEST,
            result.error or "Payment initialization failed",
            reference=reference,
            gateway=gateway.value,
        )

    transaction_id = result.transaction_id or reference
    try:
        await container.payment_repo.create_pending(
            session,
            application_id=application_id,
            gateway=gateway,
            transaction_id=transaction_id,
            amount=body.amount,
            currency=currency,
            gateway_reference=result.gateway_reference,
            gateway_response=result.raw,
        )
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("payment_record_duplicate gateway=%s transaction_id=%s", gateway.value, transaction_id)
        observe_payment_initialized(gateway.value, "duplicate")
        return _error(status.HTTP_409_CONFLICT, "Payment reference already used", reference=reference)

    observe_payment_initialized(gateway.value, "success")
    logger.info(
        "payment_record_created application_id=%s gateway=%s transaction_id=%s amount=%s",
        application_id, gateway.value, transaction_id, format_amount(body.amount, currency),
    )
    return InitializePaymentResponse(
        success=True,
        transaction_id=transaction_id,
        reference=result.reference or reference,
        redirect_url=result.redirect_url,
        payment_url=result.payment_url,
        gateway=gateway.value,
    )


async def _find_record(
    container: ServiceContainer,
    session: AsyncSession,
    reference: str,
) -> Optional[PaymentRecord]:
    record = await container.payment_repo.get_by_transaction_id(session, reference)
    if record is None:
        record = await container.payment_repo.get_by_gateway_reference(session, reference)
    return record


@router.post(
    "/verify",
    response_model=VerifyPaymentResponse,
    response_model_exclude_none=True,
    summary="Verifica el estado de un pago en el proveedor",
)
async def verify_payment(
    body: VerifyPaymentRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    container: ServiceContainer = Depends(get_container),
):
    service = container.payment_service
    record = await _find_record(container, session, body.reference)

    if record is not None:
        owned = await container.application_repo.get_owned(session, record.application_id, user_id)
        if owned is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    else:
        # Sin registro solo se consulta al proveedor si la referencia es de una solicitud propia
        application_id = parse_application_id(body.reference)
        owned = (
            await container.application_repo.get_owned(session, application_id, user_id)
            if application_id is not None
            else None
        )
        if owned is None:
            logger.info("payment_verify_unknown_reference reference=%s user_id=%s", body.reference, user_id)
            return VerifyPaymentResponse(
                success=False,
                status=PaymentStatus.PENDING.value,
                transaction_id=body.reference,
                error="Payment not found",
            )

    requested = body.gateway or (record.payment_gateway if record is not None else None)
    try:
        gateway: PaymentGateway = service.resolve_gateway(requested)
    except UnknownGatewayError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    reference = record.gateway_transaction_id if record is not None else body.reference
    verified = await service.verify_payment(
        reference,
        gateway,
        gateway_reference=record.gateway_reference if record is not None else None,
    )
    observe_payment_verified(gateway.value, verified.status.value)

    if record is not None and verified.status is not PaymentStatus.PENDING:
        await container.reconciler.apply_verified_status(
            session,
            gateway,
            verified,
            transaction_id=record.gateway_transaction_id,
            gateway_reference=record.gateway_reference,
        )

    return VerifyPaymentResponse(
        success=verified.error is None,
        status=verified.status.value,
        transaction_id=verified.transaction_id or reference,
        amount=verified.amount,
        currency=verified.currency,
        paid_at=verified.paid_at,
        error=verified.error,
    )


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/payments.py
