# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async (asyncpg en PostgreSQL). NullPool en la app; el pool lo
maneja PgBouncer / Supabase.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- check_database_health()
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

DATABASE_URL = settings.database_url
DB_ECHO_SQL = bool(settings.db_echo_sql)
DB_CONNECT_TIMEOUT_S = 5.0
DB_COMMAND_TIMEOUT_S = 10.0


def _build_connect_args(url: str) -> Dict[str, Any]:
    """connect_args de asyncpg; otros drivers (aiosqlite en tests) no reciben nada."""
    if not url.startswith("postgresql+asyncpg"):
        return {}
    args: Dict[str, Any] = {
        # PgBouncer en transaction mode no soporta prepared statements cacheados
        "statement_cache_size": 0,
        "server_settings": {"search_path": "public"},
        "timeout": DB_CONNECT_TIMEOUT_S,
        "command_timeout": DB_COMMAND_TIMEOUT_S,
    }
    if settings.db_ssl:
        args["ssl"] = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    return args


engine = create_async_engine(
    DATABASE_URL,
    poolclass=NullPool,
    echo=DB_ECHO_SQL,
    connect_args=_build_connect_args(DATABASE_URL),
)

SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("database_health_check_failed: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "get_async_session",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
