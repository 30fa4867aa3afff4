# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from typing import Type, TypeVar, Generic

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base; los repos concretos añaden sus consultas."""

    def __init__(self, model: Type[T]):
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> T:
        """Agrega la fila y hace flush; el commit queda en manos del llamador."""
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

# Fin del archivo backend/app/shared/database/repository.py
