# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/repositories/application_repository.py

Repositorio para la tabla applications.

La promoción draft -> submitted es un UPDATE condicional (WHERE status =
'draft'); dos derivaciones concurrentes no pueden pisar un estado que un
administrador ya movió.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.shared.utils.datetime_helpers import utcnow
from app.modules.applications.enums import ApplicationStatus
from app.modules.applications.models.application_models import Application


class ApplicationRepository(BaseRepository[Application]):
    def __init__(self) -> None:
        super().__init__(Application)

    async def get_fresh(self, session: AsyncSession, application_id: int) -> Optional[Application]:
        """Lee la fila ignorando el identity map (tras UPDATEs masivos)."""
        stmt = (
            select(Application)
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_owned(
        self,
        session: AsyncSession,
        application_id: int,
        user_id: str,
    ) -> Optional[Application]:
        stmt = select(Application).where(
            Application.id == application_id,
            Application.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def promote_if_draft(
        self,
        session: AsyncSession,
        application_id: int,
        target: ApplicationStatus = ApplicationStatus.SUBMITTED,
    ) -> bool:
        """True si esta llamada movió la solicitud desde draft."""
        stmt = (
            update(Application)
            .where(
                Application.id == application_id,
                Application.status == ApplicationStatus.DRAFT,
            )
            .values(status=target, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def touch(self, session: AsyncSession, application_id: int) -> None:
        stmt = (
            update(Application)
            .where(Application.id == application_id)
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)


__all__ = ["ApplicationRepository"]

# Fin del archivo backend/app/modules/applications/repositories/application_repository.py
