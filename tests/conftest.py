# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para LoanIntake.

Ajustes clave:
- PYTHON_ENV=test antes de importar app.* (settings y engine se crean al importar)
- Motor ASYNC: sqlite+aiosqlite sobre archivo temporal por test (NullPool),
  así dos sesiones concurrentes ven la misma base
- Parcheo de tipos PostgreSQL (JSONB/ENUM) a equivalentes SQLite
- FakeProviderAPI: Paystack y Pesapal simulados con httpx.MockTransport
- App FastAPI con dependency_overrides (contenedor, sesión, identidad)
"""

import os

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-supabase-jwt-secret-with-32-chars!!")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import json
from collections.abc import AsyncIterator
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy import JSON
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.database.base import Base

# CRÍTICO: importar TODOS los modelos antes de parchear la metadata
from app.modules.applications.models import Application, NDASignature
from app.modules.payments.models import PaymentRecord
from app.modules.applications.enums import ApplicationStatus
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.shared.config import PaymentsSettings
from app.shared.utils.datetime_helpers import utcnow

USER_ID = "0b6f2c1e-7a7d-4c1b-9f1e-5d2a3c4b5e6f"
OTHER_USER_ID = "9e8d7c6b-5a49-4382-9170-a1b2c3d4e5f6"
PAYSTACK_SECRET = "sk_test_loanintake_0123456789abcdef"
PESAPAL_SANDBOX = "https://cybqa.pesapal.com/pesapalv3"


def _patch_pg_types_for_sqlite(metadata) -> None:
    """Reemplaza tipos Postgres (JSONB/ENUM) por equivalentes compatibles con SQLite."""
    for table in metadata.tables.values():
        table.schema = None
        for col in table.columns:
            t = col.type
            if isinstance(t, JSONB):
                col.type = JSON()
            elif isinstance(t, PG_ENUM):
                # ENUM no nativo: guarda el value y devuelve el miembro del enum
                col.type = SQLEnum(
                    t.enum_class,
                    native_enum=False,
                    create_constraint=False,
                    length=50,
                    values_callable=lambda e: [m.value for m in e],
                )


_patch_pg_types_for_sqlite(Base.metadata)


# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'loan_intake.db'}",
        poolclass=NullPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------
@pytest.fixture
def make_application(db_session) -> Callable:
    async def _make(
        application_id: int = 123,
        *,
        user_id: str = USER_ID,
        status: ApplicationStatus = ApplicationStatus.DRAFT,
    ) -> Application:
        application = Application(
            id=application_id,
            user_id=user_id,
            status=status,
            application_data={"loan_amount": 50000, "industry": "agriculture"},
        )
        db_session.add(application)
        await db_session.commit()
        return application

    return _make


@pytest.fixture
def sign_nda(db_session) -> Callable:
    async def _sign(application_id: int = 123) -> NDASignature:
        signature = NDASignature(
            application_id=application_id,
            signature_data="data:image/png;base64,iVBORw0KGgo=",
            ip_address="197.248.10.20",
            user_agent="pytest",
        )
        db_session.add(signature)
        await db_session.commit()
        return signature

    return _sign


@pytest.fixture
def make_payment_record(db_session) -> Callable:
    async def _make(
        application_id: int = 123,
        *,
        transaction_id: str = "APP-123-1700000000000",
        gateway: PaymentGateway = PaymentGateway.PAYSTACK,
        status: PaymentStatus = PaymentStatus.PENDING,
        gateway_reference: Optional[str] = None,
        amount: int = 30000,
        currency: str = "USD",
    ) -> PaymentRecord:
        now = utcnow()
        record = PaymentRecord(
            application_id=application_id,
            payment_gateway=gateway,
            gateway_transaction_id=transaction_id,
            gateway_reference=gateway_reference,
            amount=amount,
            currency=currency,
            status=status,
            created_at=now,
            updated_at=now,
            paid_at=now if status is PaymentStatus.COMPLETED else None,
        )
        db_session.add(record)
        await db_session.commit()
        return record

    return _make


# -----------------------------------------------------------------------------
# Proveedores simulados
# -----------------------------------------------------------------------------
class FakeProviderAPI:
    """
    Handler de httpx.MockTransport que imita Paystack y Pesapal v3.

    Los atributos públicos permiten a cada test ajustar las respuestas.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.paystack_initialize_ok = True
        self.paystack_verify: Dict[str, Any] = {
            "status": "success",
            "amount": 30000,
            "currency": "USD",
            "paid_at": "2026-10-01T10:00:00.000Z",
            "id": 4099260516,
        }
        self.paystack_verify_http_status = 200
        self.pesapal_status: Dict[str, Any] = {
            "payment_status_description": "Completed",
            "amount": 300.0,
            "currency": "USD",
            "created_date": "2026-10-01T10:00:00.000Z",
            "status_code": 1,
        }
        self.pesapal_status_raises = False
        self.pesapal_merchant_reference: Optional[str] = None

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.paystack.co":
            return self._paystack(request)
        if request.url.host == "cybqa.pesapal.com":
            return self._pesapal(request)
        return httpx.Response(404, json={"message": "unknown host"})

    def _paystack(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/transaction/initialize":
            body = json.loads(request.content)
            if not self.paystack_initialize_ok:
                return httpx.Response(400, json={"status": False, "message": "Invalid key"})
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "message": "Authorization URL created",
                    "data": {
                        "authorization_url": f"https://checkout.paystack.com/{body['reference']}",
                        "access_code": "0peioxfhpn",
                        "reference": body["reference"],
                    },
                },
            )
        if path.startswith("/transaction/verify/"):
            reference = path.rsplit("/", 1)[-1]
            if self.paystack_verify_http_status != 200:
                return httpx.Response(
                    self.paystack_verify_http_status,
                    json={"status": False, "message": "Transaction reference not found"},
                )
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "message": "Verification successful",
                    "data": {"reference": reference, **self.paystack_verify},
                },
            )
        return httpx.Response(404, json={"status": False, "message": "not found"})

    def _pesapal(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/pesapalv3")
        if path == "/api/Auth/RequestToken":
            return httpx.Response(
                200,
                json={"token": "pesapal-token", "expiryDate": "2099-01-01T00:00:00.000Z", "status": "200"},
            )
        if path == "/api/URLSetup/RegisterIPN":
            return httpx.Response(200, json={"ipn_id": "ipn-registered-1", "status": "200"})
        if path == "/api/Transactions/SubmitOrderRequest":
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "order_tracking_id": "b945e4af-80a5-4ec1-8706-e03f8332fb04",
                    "merchant_reference": body["id"],
                    "redirect_url": "https://cybqa.pesapal.com/pesapaliframe/PesapalIframe3/Index?OrderTrackingId=b945e4af",
                    "status": "200",
                },
            )
        if path == "/api/Transactions/GetTransactionStatus":
            if self.pesapal_status_raises:
                return httpx.Response(500, json={"message": "internal error"})
            tracking_id = request.url.params.get("orderTrackingId")
            return httpx.Response(
                200,
                json={
                    **self.pesapal_status,
                    "order_tracking_id": tracking_id,
                    "merchant_reference": self.pesapal_merchant_reference or "APP-123-1700000000000",
                },
            )
        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def provider_api() -> FakeProviderAPI:
    return FakeProviderAPI()


@pytest.fixture
async def gateway_http_client(provider_api) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(provider_api)) as client:
        yield client


@pytest.fixture
def payments_settings() -> PaymentsSettings:
    return PaymentsSettings(
        paystack_secret_key=PAYSTACK_SECRET,
        pesapal_consumer_key="pesapal-ck",
        pesapal_consumer_secret="pesapal-cs",
        pesapal_environment="sandbox",
        pesapal_ipn_id="ipn-configured-1",
        payments_default_gateway="paystack",
        _env_file=None,
    )


@pytest.fixture
def container(payments_settings, gateway_http_client):
    from app.core.container import build_container
    from app.core.settings import get_settings

    return build_container(get_settings(), payments_settings, http_client=gateway_http_client)


# -----------------------------------------------------------------------------
# App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app(container, session_factory):
    """
    App principal con dependencias sustituidas:
    - get_container -> contenedor con proveedores simulados
    - get_async_session -> SQLite del test
    - get_current_user_id -> USER_ID
    """
    from app.main import app as fastapi_app
    from app.core.container import get_container
    from app.shared.auth_context import get_current_user_id
    from app.shared.database.database import get_async_session

    async def _session_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_container] = lambda: container
    fastapi_app.dependency_overrides[get_async_session] = _session_override
    fastapi_app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
