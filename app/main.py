# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend LoanIntake.

Ajustes clave:
- .env cargado antes de construir settings
- Logging configurado una vez (plain | pretty | json)
- Contenedor de dependencias construido en el lifespan (app.state.container)
- Observabilidad Prometheus (/metrics) vía app.observability.prom
- Errores de validación como 400 {"success": false, "error": ...}
- Health principal /health en app.routes.health_routes
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea settings
# En producción se respetan las variables del entorno (override=False)
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.container import build_container
from app.core.logging import setup_logging
from app.core.settings import get_settings
from app.observability.prom import setup_observability
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.shared.utils.json_response import UTF8JSONResponse

settings = get_settings()
setup_logging(level=settings.log_level, fmt=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    app.state.container = build_container(settings)
    logger.info(
        "🟢 Backend %s iniciado (env=%s, gateways=%s)",
        settings.app_name,
        settings.python_env,
        app.state.container.payment_service.get_available_gateways(),
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            await app.state.container.aclose()
        logger.info("🔴 Backend %s apagado.", settings.app_name)


openapi_tags = [
    {"name": "payments", "description": "Inicialización y verificación de pagos"},
    {"name": "payments:webhooks", "description": "Webhooks/IPN de Paystack y Pesapal"},
    {"name": "applications", "description": "Derivación del estado de solicitudes"},
]

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Cobro de la cuota de solicitud y reconciliación del estado de solicitudes",
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    default_response_class=UTF8JSONResponse,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Errores de validación de request -> 400 con el contrato {success, error}."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return UTF8JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": f"{location}: {message}" if location else message,
        },
    )


# IMPORTANTE: Starlette ejecuta los middlewares en orden inverso al registro.
# CORS se registra al final para ejecutarse primero (outermost).
app.add_middleware(RequestLoggingMiddleware)
setup_observability(app)
app.add_middleware(JSONExceptionMiddleware)
_cors_origins = settings.get_cors_origins()
# "*" con allow_credentials=True es inválido en navegadores
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=_cors_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,
)

# Incluye router maestro
from app.routes import router as main_router  # noqa: E402

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "active"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port, reload=settings.is_dev)

# Fin del archivo backend/app/main.py
