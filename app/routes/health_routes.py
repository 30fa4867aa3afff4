# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del backend LoanIntake.
"""

from fastapi import APIRouter, Request

from app.core.db import check_database_health
from app.core.settings import get_settings
from app.shared.utils.datetime_helpers import to_iso8601, utcnow

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description="Estado básico del servicio, conectividad a la base de datos y pasarelas registradas.",
)
async def health_check(request: Request) -> dict:
    settings = get_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    container = getattr(request.app.state, "container", None)
    gateways = container.payment_service.get_available_gateways() if container is not None else []

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": to_iso8601(utcnow()),
        "environment": settings.python_env,
        "database": {"reachable": db_ok},
        "payments": {"gateways": gateways},
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
