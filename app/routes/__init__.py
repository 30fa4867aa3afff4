# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API.

Responsabilidades:
- Health (/health) sin prefijo
- Módulos de dominio bajo /api
"""

from fastapi import APIRouter

from app.modules.applications.routes import router as applications_router
from app.modules.payments.routes import router as payments_router

from .health_routes import router as health_router

router = APIRouter()
router.include_router(health_router)

api = APIRouter(prefix="/api")
api.include_router(payments_router)
api.include_router(applications_router)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
