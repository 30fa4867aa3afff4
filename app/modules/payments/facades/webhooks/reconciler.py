# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/reconciler.py

Reconciliador de webhooks: decide qué estado persistido debe cambiar a
partir de un WebhookResult canónico y lo aplica una sola vez.

Flujo:
1. success=False -> log + métrica, sin mutar (el proveedor reintentará)
2. success=True sin correlación y con estado -> WebhookPayloadError (HTTP 400)
3. should_update_database=False -> acuse sin persistir
4. UPDATE condicional (solo desde pending) + commit
5. completed aplicado -> derivación del estado de la solicitud

Un fallo de persistencia tras un webhook verificado NO se propaga: se
registra como "reconciliation_backlog" para conciliación manual y el
proveedor recibe su acuse.

Autor: LoanIntake
Fecha: 2026-10-01
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.applications.services.status_deriver import (
    ApplicationStatusDeriver,
    DerivationResult,
)
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.metrics import (
    observe_reconciliation,
    observe_reconciliation_backlog,
    observe_webhook_rejected,
)
from app.modules.payments.repositories.payment_record_repository import (
    PaymentRecordRepository,
    StatusWriteOutcome,
)
from app.modules.payments.schemas.gateway_schemas import CanonicalPaymentStatus, WebhookResult

logger = logging.getLogger(__name__)


class WebhookPayloadError(ValueError):
    """Webhook estructuralmente inválido (falta el campo de correlación)."""

    def __init__(self, gateway: PaymentGateway, message: str = "missing correlation field"):
        super().__init__(message)
        self.gateway = gateway


class ReconcileOutcome(StrEnum):
    REJECTED = "rejected"
    ACKNOWLEDGED = "acknowledged"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"
    PERSISTENCE_FAILED = "persistence_failed"


@dataclass(frozen=True)
class ReconcileReport:
    outcome: ReconcileOutcome
    gateway: PaymentGateway
    transaction_id: Optional[str] = None
    status: Optional[PaymentStatus] = None
    record_id: Optional[int] = None
    application_id: Optional[int] = None
    derivation: Optional[DerivationResult] = None

    @property
    def persisted(self) -> bool:
        return self.outcome is ReconcileOutcome.UPDATED


_WRITE_TO_OUTCOME = {
    StatusWriteOutcome.APPLIED: ReconcileOutcome.UPDATED,
    StatusWriteOutcome.UNCHANGED: ReconcileOutcome.UNCHANGED,
    StatusWriteOutcome.NOT_FOUND: ReconcileOutcome.NOT_FOUND,
}


def _reason_label(error: Optional[str]) -> str:
    """Etiqueta de métrica: el prefijo del error, sin el detalle."""
    if not error:
        return "unverified"
    return error.split(":", 1)[0].strip() or "unverified"


class WebhookReconciler:
    def __init__(
        self,
        payment_repo: Optional[PaymentRecordRepository] = None,
        deriver: Optional[ApplicationStatusDeriver] = None,
    ) -> None:
        self.payment_repo = payment_repo or PaymentRecordRepository()
        self.deriver = deriver or ApplicationStatusDeriver(payment_repo=self.payment_repo)

    async def reconcile(
        self,
        session: AsyncSession,
        gateway: PaymentGateway,
        result: WebhookResult,
    ) -> ReconcileReport:
        """
        Aplica un WebhookResult.

        Raises:
            WebhookPayloadError: payload autenticado pero sin correlación
        """
        started = time.perf_counter()

        if not result.success:
            logger.warning(
                "webhook_not_applied gateway=%s transaction_id=%s error=%s",
                gateway.value, result.transaction_id, result.error,
            )
            observe_webhook_rejected(gateway.value, _reason_label(result.error))
            report = ReconcileReport(ReconcileOutcome.REJECTED, gateway, result.transaction_id)
            observe_reconciliation(gateway.value, report.outcome.value, time.perf_counter() - started)
            return report

        if not result.has_correlation and result.status is not None:
            observe_webhook_rejected(gateway.value, "missing_correlation")
            raise WebhookPayloadError(gateway)

        if not result.should_update_database or result.status is None:
            logger.info(
                "webhook_acknowledged gateway=%s transaction_id=%s status=%s",
                gateway.value, result.transaction_id, result.status,
            )
            report = ReconcileReport(
                ReconcileOutcome.ACKNOWLEDGED, gateway, result.transaction_id, result.status,
            )
            observe_reconciliation(gateway.value, report.outcome.value, time.perf_counter() - started)
            return report

        report = await self._persist(
            session,
            gateway,
            result.status,
            transaction_id=result.transaction_id,
            gateway_reference=result.gateway_reference,
            gateway_response=result.raw,
            paid_at=result.paid_at,
            trigger="payment_webhook",
        )
        observe_reconciliation(gateway.value, report.outcome.value, time.perf_counter() - started)
        return report

    async def apply_verified_status(
        self,
        session: AsyncSession,
        gateway: PaymentGateway,
        verified: CanonicalPaymentStatus,
        *,
        transaction_id: Optional[str] = None,
        gateway_reference: Optional[str] = None,
    ) -> ReconcileReport:
        """Aplica el resultado de una verificación explícita (POST /verify)."""
        tx = transaction_id or verified.transaction_id or verified.reference
        if verified.status is PaymentStatus.PENDING:
            return ReconcileReport(ReconcileOutcome.ACKNOWLEDGED, gateway, tx, verified.status)
        return await self._persist(
            session,
            gateway,
            verified.status,
            transaction_id=tx,
            gateway_reference=gateway_reference or verified.gateway_reference,
            gateway_response=verified.raw,
            paid_at=verified.paid_at,
            trigger="payment_verify",
        )

    async def _persist(
        self,
        session: AsyncSession,
        gateway: PaymentGateway,
        status: PaymentStatus,
        *,
        transaction_id: Optional[str],
        gateway_reference: Optional[str],
        gateway_response: Optional[Dict[str, Any]],
        paid_at: Optional[datetime],
        trigger: str,
    ) -> ReconcileReport:
        try:
            write, record = await self.payment_repo.apply_status(
                session,
                gateway=gateway,
                status=status,
                transaction_id=transaction_id,
                gateway_reference=gateway_reference,
                gateway_response=gateway_response,
                paid_at=paid_at,
            )
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception(
                "reconciliation_backlog gateway=%s transaction_id=%s gateway_reference=%s status=%s",
                gateway.value, transaction_id, gateway_reference, status.value,
            )
            observe_reconciliation_backlog(gateway.value)
            return ReconcileReport(ReconcileOutcome.PERSISTENCE_FAILED, gateway, transaction_id, status)

        outcome = _WRITE_TO_OUTCOME[write]
        if record is None:
            logger.warning(
                "webhook_record_not_found gateway=%s transaction_id=%s gateway_reference=%s",
                gateway.value, transaction_id, gateway_reference,
            )
            return ReconcileReport(outcome, gateway, transaction_id, status)

        # derive_safely puede hacer rollback y expirar el registro
        record_id = record.id
        application_id = record.application_id
        record_tx = record.gateway_transaction_id
        current = PaymentStatus(record.status)
        logger.info(
            "payment_status_write gateway=%s transaction_id=%s record_id=%s requested=%s outcome=%s current=%s",
            gateway.value, record_tx, record_id, status.value, outcome.value, current.value,
        )

        derivation = None
        if outcome is ReconcileOutcome.UPDATED and status is PaymentStatus.COMPLETED:
            derivation = await self.deriver.derive_safely(session, application_id, trigger=trigger)

        return ReconcileReport(
            outcome,
            gateway,
            record_tx,
            current,
            record_id,
            application_id,
            derivation,
        )


__all__ = [
    "ReconcileOutcome",
    "ReconcileReport",
    "WebhookPayloadError",
    "WebhookReconciler",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/reconciler.py
