# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/services/status_deriver.py

Derivador único del estado de una solicitud.

Regla (la única automática): draft -> submitted cuando existen a la vez
un PaymentRecord completed y una NDASignature para la solicitud.
Cualquier otro estado es una barrera: la derivación no lo toca.

Se recalcula desde los hechos guardados en cada llamada (sin deltas del
llamador), por lo que invocarlo de forma redundante o concurrente es seguro.
Siempre actualiza updated_at como marca de "última revisión".

Disparadores:
- reconciliador de webhooks tras un pago completed
- verificación explícita de pago que resulta completed
- POST /api/applications/update-status (firma de NDA u otros)

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.applications.enums import ApplicationStatus
from app.modules.applications.repositories import ApplicationRepository, NDASignatureRepository
from app.modules.payments.metrics import observe_status_derivation
from app.modules.payments.repositories.payment_record_repository import PaymentRecordRepository

logger = logging.getLogger(__name__)


class DerivationOutcome(StrEnum):
    PROMOTED = "promoted"
    UNCHANGED = "unchanged"  # draft sin ambos hechos
    BARRIER = "barrier"  # estado distinto de draft, no se toca
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class DerivationResult:
    application_id: int
    outcome: DerivationOutcome
    status: Optional[ApplicationStatus]
    payment_completed: bool = False
    nda_signed: bool = False

    @property
    def changed(self) -> bool:
        return self.outcome is DerivationOutcome.PROMOTED


class ApplicationStatusDeriver:
    """Calcula y persiste el estado derivado de una solicitud."""

    def __init__(
        self,
        application_repo: Optional[ApplicationRepository] = None,
        nda_repo: Optional[NDASignatureRepository] = None,
        payment_repo: Optional[PaymentRecordRepository] = None,
    ) -> None:
        self.application_repo = application_repo or ApplicationRepository()
        self.nda_repo = nda_repo or NDASignatureRepository()
        self.payment_repo = payment_repo or PaymentRecordRepository()

    async def derive(
        self,
        session: AsyncSession,
        application_id: int,
        *,
        trigger: str = "manual",
    ) -> DerivationResult:
        """
        Recalcula el estado y hace commit.

        Raises:
            SQLAlchemyError: fallos de persistencia (ver derive_safely)
        """
        application = await self.application_repo.get_fresh(session, application_id)
        if application is None:
            logger.warning("status_derivation_not_found application_id=%s trigger=%s", application_id, trigger)
            observe_status_derivation(trigger, DerivationOutcome.NOT_FOUND.value)
            return DerivationResult(application_id, DerivationOutcome.NOT_FOUND, None)

        current = ApplicationStatus(application.status)
        payment_completed = await self.payment_repo.has_completed_for_application(session, application_id)
        nda_signed = await self.nda_repo.exists_for_application(session, application_id)

        outcome = DerivationOutcome.BARRIER if not current.is_derivable else DerivationOutcome.UNCHANGED
        if current.is_derivable and payment_completed and nda_signed:
            if await self.application_repo.promote_if_draft(session, application_id):
                outcome = DerivationOutcome.PROMOTED
            else:
                # Otro actor lo movió entre la lectura y el UPDATE
                outcome = DerivationOutcome.BARRIER

        if outcome is not DerivationOutcome.PROMOTED:
            await self.application_repo.touch(session, application_id)
        await session.commit()

        refreshed = await self.application_repo.get_fresh(session, application_id)
        status = ApplicationStatus(refreshed.status) if refreshed is not None else current

        logger.info(
            "status_derivation application_id=%s trigger=%s outcome=%s status=%s payment_completed=%s nda_signed=%s",
            application_id, trigger, outcome.value, status.value, payment_completed, nda_signed,
        )
        observe_status_derivation(trigger, outcome.value)
        return DerivationResult(application_id, outcome, status, payment_completed, nda_signed)

    async def derive_safely(
        self,
        session: AsyncSession,
        application_id: int,
        *,
        trigger: str = "manual",
    ) -> Optional[DerivationResult]:
        """Como derive(), pero nunca lanza: un fallo se registra y devuelve None."""
        try:
            return await self.derive(session, application_id, trigger=trigger)
        except Exception:
            logger.exception("status_derivation_failed application_id=%s trigger=%s", application_id, trigger)
            observe_status_derivation(trigger, "error")
            await session.rollback()
            return None


__all__ = ["ApplicationStatusDeriver", "DerivationOutcome", "DerivationResult"]

# Fin del archivo backend/app/modules/applications/services/status_deriver.py
