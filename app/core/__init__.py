# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend LoanIntake:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones
- Contenedor de dependencias

El contenedor (app.core.container) no se reexporta aquí: depende de los
módulos de dominio y se importa explícitamente.
"""

from .settings import get_settings, get_payments_settings
from .logging import setup_logging
from .db import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)

__all__ = [
    "get_settings",
    "get_payments_settings",
    "setup_logging",
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/__init__.py
