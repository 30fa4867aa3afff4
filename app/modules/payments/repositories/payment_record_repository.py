# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_record_repository.py

Repositorio para la tabla payment_records.

Responsabilidades:
- Alta del registro pending al inicializar un pago
- Correlación por gateway_transaction_id con fallback a gateway_reference
- Escritura condicional de estado (solo pending -> terminal, compare-and-set)

Las transiciones se expresan como un único UPDATE ... WHERE status IN
(<predecesores>), de modo que dos webhooks concurrentes para la misma
referencia no pueden retroceder un pago completado.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.shared.utils.datetime_helpers import utcnow
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.models.payment_record_models import PaymentRecord


class StatusWriteOutcome(StrEnum):
    """Resultado de una escritura condicional de estado."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"  # mismo estado o ya más avanzado
    NOT_FOUND = "not_found"


class PaymentRecordRepository(BaseRepository[PaymentRecord]):
    def __init__(self) -> None:
        super().__init__(PaymentRecord)

    # -----------------------------------------------------------
    # Alta
    # -----------------------------------------------------------
    async def create_pending(
        self,
        session: AsyncSession,
        *,
        application_id: int,
        gateway: PaymentGateway,
        transaction_id: str,
        amount: int,
        currency: str,
        gateway_reference: Optional[str] = None,
        gateway_response: Optional[Dict[str, Any]] = None,
    ) -> PaymentRecord:
        now = utcnow()
        return await self.create(
            session,
            application_id=application_id,
            payment_gateway=gateway,
            gateway_transaction_id=transaction_id,
            gateway_reference=gateway_reference,
            amount=amount,
            currency=currency.upper(),
            status=PaymentStatus.PENDING,
            gateway_response=gateway_response,
            created_at=now,
            updated_at=now,
        )

    # -----------------------------------------------------------
    # Búsquedas de correlación
    # -----------------------------------------------------------
    async def get_by_transaction_id(
        self,
        session: AsyncSession,
        transaction_id: str,
        gateway: Optional[PaymentGateway] = None,
    ) -> Optional[PaymentRecord]:
        stmt = select(PaymentRecord).where(PaymentRecord.gateway_transaction_id == transaction_id)
        if gateway is not None:
            stmt = stmt.where(PaymentRecord.payment_gateway == gateway)
        stmt = stmt.order_by(PaymentRecord.created_at.desc()).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_by_gateway_reference(
        self,
        session: AsyncSession,
        gateway_reference: str,
        gateway: Optional[PaymentGateway] = None,
    ) -> Optional[PaymentRecord]:
        stmt = select(PaymentRecord).where(PaymentRecord.gateway_reference == gateway_reference)
        if gateway is not None:
            stmt = stmt.where(PaymentRecord.payment_gateway == gateway)
        stmt = stmt.order_by(PaymentRecord.created_at.desc()).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def find_for_correlation(
        self,
        session: AsyncSession,
        gateway: PaymentGateway,
        transaction_id: Optional[str],
        gateway_reference: Optional[str],
    ) -> Optional[PaymentRecord]:
        """Busca por transaction id y, si no aparece, por la referencia secundaria."""
        record = None
        if transaction_id:
            record = await self.get_by_transaction_id(session, transaction_id, gateway)
        if record is None and gateway_reference:
            record = await self.get_by_gateway_reference(session, gateway_reference, gateway)
        # Algunos proveedores devuelven en un campo el valor guardado en el otro
        if record is None and transaction_id and transaction_id != gateway_reference:
            record = await self.get_by_gateway_reference(session, transaction_id, gateway)
        return record

    async def has_completed_for_application(self, session: AsyncSession, application_id: int) -> bool:
        stmt = select(
            exists().where(
                PaymentRecord.application_id == application_id,
                PaymentRecord.status == PaymentStatus.COMPLETED,
            )
        )
        result = await session.execute(stmt)
        return bool(result.scalar())

    # -----------------------------------------------------------
    # Escritura condicional de estado
    # -----------------------------------------------------------
    async def apply_status(
        self,
        session: AsyncSession,
        *,
        gateway: PaymentGateway,
        status: PaymentStatus,
        transaction_id: Optional[str] = None,
        gateway_reference: Optional[str] = None,
        gateway_response: Optional[Dict[str, Any]] = None,
        paid_at: Optional[datetime] = None,
    ) -> Tuple[StatusWriteOutcome, Optional[PaymentRecord]]:
        """
        Mueve el registro a ``status`` solo si el estado actual es un predecesor.

        No hace commit; el llamador decide la frontera transaccional.

        Returns:
            (outcome, registro tras la escritura o None si no existe)
        """
        record = await self.find_for_correlation(session, gateway, transaction_id, gateway_reference)
        if record is None:
            return StatusWriteOutcome.NOT_FOUND, None

        predecessors = status.predecessors()
        if not predecessors:
            return StatusWriteOutcome.UNCHANGED, record

        now = utcnow()
        values: Dict[str, Any] = {"status": status, "updated_at": now}
        if gateway_response is not None:
            values["gateway_response"] = gateway_response
        if status is PaymentStatus.COMPLETED:
            values["paid_at"] = paid_at or now

        stmt = (
            update(PaymentRecord)
            .where(
                PaymentRecord.id == record.id,
                PaymentRecord.status.in_(predecessors),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)

        # Relee la fila: el UPDATE no sincroniza el identity map
        refreshed = await self.get_by_transaction_id(session, record.gateway_transaction_id, gateway)
        if result.rowcount == 0:
            return StatusWriteOutcome.UNCHANGED, refreshed
        return StatusWriteOutcome.APPLIED, refreshed


__all__ = ["PaymentRecordRepository", "StatusWriteOutcome"]

# Fin del archivo backend/app/modules/payments/repositories/payment_record_repository.py
