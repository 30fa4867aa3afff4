# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/routes/applications.py

Endpoint:
- POST /applications/update-status

Trigger explícito de re-derivación usado por el subsistema de firma de
NDA tras registrar una firma. Siempre pasa por ApplicationStatusDeriver.

Autor: LoanIntake
Fecha: 2026-10-02
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ServiceContainer, get_container
from app.shared.auth_context import get_current_user_id
from app.shared.database.database import get_async_session
from app.modules.applications.enums import ApplicationStatus
from app.modules.applications.schemas import UpdateStatusRequest, UpdateStatusResponse

router = APIRouter(tags=["applications"])


@router.post(
    "/update-status",
    response_model=UpdateStatusResponse,
    response_model_exclude_none=True,
    summary="Recalcula el estado de una solicitud desde sus hechos guardados",
)
async def update_application_status(
    body: UpdateStatusRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    container: ServiceContainer = Depends(get_container),
) -> UpdateStatusResponse:
    application = await container.application_repo.get_owned(session, body.application_id, user_id)
    if application is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    # El rollback de derive_safely expira la instancia
    current_status = ApplicationStatus(application.status)
    result = await container.deriver.derive_safely(session, body.application_id, trigger=body.trigger)
    if result is None:
        # La derivación nunca es fatal para quien la dispara
        return UpdateStatusResponse(
            success=False,
            application_id=body.application_id,
            status=current_status.value,
            error="Status derivation failed",
        )

    return UpdateStatusResponse(
        success=True,
        application_id=body.application_id,
        status=result.status.value if result.status is not None else None,
        changed=result.changed,
        payment_completed=result.payment_completed,
        nda_signed=result.nda_signed,
    )


__all__ = ["router"]

# Fin del archivo backend/app/modules/applications/routes/applications.py
