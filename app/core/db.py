# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Envuelve `app.shared.database.database`:

- engine
- SessionLocal
- Base
- get_async_session
- check_database_health()
"""

from app.shared.database import Base
from app.shared.database.database import (
    engine,
    SessionLocal,
    get_async_session,
    check_database_health,
)

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/db.py
