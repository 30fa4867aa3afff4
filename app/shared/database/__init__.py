# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    get_async_session,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, as_pg_enum

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "as_pg_enum",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
