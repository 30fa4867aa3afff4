# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/repositories/nda_signature_repository.py

Repositorio (solo lectura para la derivación) de nda_signatures.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.applications.models.nda_signature_models import NDASignature


class NDASignatureRepository(BaseRepository[NDASignature]):
    def __init__(self) -> None:
        super().__init__(NDASignature)

    async def exists_for_application(self, session: AsyncSession, application_id: int) -> bool:
        stmt = select(exists().where(NDASignature.application_id == application_id))
        result = await session.execute(stmt)
        return bool(result.scalar())


__all__ = ["NDASignatureRepository"]
