# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/routes/test_payment_routes.py

Rutas /api/payments: pasarelas disponibles, inicialización y verificación.
"""
import json

import pytest

from app.modules.applications.enums import ApplicationStatus
from app.modules.applications.repositories import ApplicationRepository
from app.modules.payments.enums import PaymentGateway, PaymentStatus
from app.modules.payments.repositories import PaymentRecordRepository
from tests.conftest import OTHER_USER_ID

TX = "APP-123-1700000000000"


def _init_body(**overrides):
    body = {
        "gateway": "paystack",
        "amount": 30000,
        "currency": "USD",
        "reference": TX,
        "customerEmail": "amina@example.com",
        "customerName": "Amina Njoroge",
        "callbackUrl": "https://app.example.com/payment/callback",
    }
    body.update(overrides)
    return body


class TestAvailableGateways:
    @pytest.mark.asyncio
    async def test_lists_configured_gateways(self, async_client):
        resp = await async_client.get("/api/payments/initialize")

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert sorted(data["availableGateways"]) == ["paystack", "pesapal"]


class TestInitialize:
    @pytest.mark.asyncio
    async def test_paystack_creates_pending_record(self, async_client, make_application, db_session, provider_api):
        await make_application()

        resp = await async_client.post("/api/payments/initialize", json=_init_body())

        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["success"] is True
        assert data["transactionId"] == TX
        assert data["redirectUrl"] == f"https://checkout.paystack.com/{TX}"
        assert data["gateway"] == "paystack"

        sent = json.loads(provider_api.requests[-1].content)
        assert sent["amount"] == 30000
        assert sent["metadata"]["application_id"] == 123

        record = await PaymentRecordRepository().get_by_transaction_id(db_session, TX)
        assert record.status is PaymentStatus.PENDING
        assert record.payment_gateway is PaymentGateway.PAYSTACK
        assert record.amount == 30000

    @pytest.mark.asyncio
    async def test_pesapal_stores_tracking_id(self, async_client, make_application, db_session):
        await make_application()

        resp = await async_client.post("/api/payments/initialize", json=_init_body(gateway="pesapal"))

        assert resp.status_code == 200, resp.text
        record = await PaymentRecordRepository().get_by_transaction_id(db_session, TX)
        assert record.gateway_reference == "b945e4af-80a5-4ec1-8706-e03f8332fb04"

    @pytest.mark.asyncio
    async def test_application_id_from_metadata_wins(self, async_client, make_application, db_session):
        await make_application(77)

        resp = await async_client.post(
            "/api/payments/initialize",
            json=_init_body(reference="order-xyz", metadata={"application_id": 77}),
        )

        assert resp.status_code == 200, resp.text
        record = await PaymentRecordRepository().get_by_transaction_id(db_session, "order-xyz")
        assert record.application_id == 77

    @pytest.mark.asyncio
    async def test_reference_is_generated_from_metadata(self, async_client, make_application, db_session):
        await make_application()
        body = _init_body(metadata={"applicationId": 123})
        del body["reference"]

        resp = await async_client.post("/api/payments/initialize", json=body)

        assert resp.status_code == 200, resp.text
        transaction_id = resp.json()["transactionId"]
        assert transaction_id.startswith("APP-123-")
        record = await PaymentRecordRepository().get_by_transaction_id(db_session, transaction_id)
        assert record.application_id == 123

    @pytest.mark.asyncio
    async def test_unknown_gateway(self, async_client, make_application, db_session):
        await make_application()

        resp = await async_client.post("/api/payments/initialize", json=_init_body(gateway="stripe"))

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert await PaymentRecordRepository().get_by_transaction_id(db_session, TX) is None

    @pytest.mark.asyncio
    async def test_missing_field_is_400(self, async_client, make_application):
        await make_application()
        body = _init_body()
        del body["customerEmail"]

        resp = await async_client.post("/api/payments/initialize", json=body)

        assert resp.status_code == 400
        data = resp.json()
        assert data["success"] is False
        assert "customerEmail" in data["error"]

    @pytest.mark.asyncio
    async def test_unparseable_reference_is_400(self, async_client, make_application):
        await make_application()

        resp = await async_client.post("/api/payments/initialize", json=_init_body(reference="order-xyz"))

        assert resp.status_code == 400
        assert resp.json()["success"] is False

    @pytest.mark.asyncio
    async def test_unsupported_currency(self, async_client, make_application):
        await make_application()

        resp = await async_client.post("/api/payments/initialize", json=_init_body(currency="XYZ"))

        assert resp.status_code == 400
        assert "XYZ" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_provider_failure_creates_no_record(
        self, async_client, make_application, db_session, provider_api
    ):
        await make_application()
        provider_api.paystack_initialize_ok = False

        resp = await async_client.post("/api/payments/initialize", json=_init_body())

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert await PaymentRecordRepository().get_by_transaction_id(db_session, TX) is None

    @pytest.mark.asyncio
    async def test_foreign_application_is_404(self, async_client, make_application, db_session, provider_api):
        await make_application(user_id=OTHER_USER_ID)

        resp = await async_client.post("/api/payments/initialize", json=_init_body())

        assert resp.status_code == 404
        assert provider_api.requests == []

    @pytest.mark.asyncio
    async def test_reused_reference_is_409(self, async_client, make_application, make_payment_record):
        await make_application()
        await make_payment_record()

        resp = await async_client.post("/api/payments/initialize", json=_init_body())

        assert resp.status_code == 409
        assert resp.json()["success"] is False


class TestVerify:
    @pytest.mark.asyncio
    async def test_completed_updates_record_and_derives(
        self, async_client, make_application, sign_nda, make_payment_record, db_session
    ):
        await make_application()
        await sign_nda()
        await make_payment_record()

        resp = await async_client.post("/api/payments/verify", json={"reference": TX})

        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["success"] is True
        assert data["status"] == "completed"
        assert data["amount"] == 30000

        record = await PaymentRecordRepository().get_by_transaction_id(db_session, TX)
        assert record.status is PaymentStatus.COMPLETED
        application = await ApplicationRepository().get_fresh(db_session, 123)
        assert application.status is ApplicationStatus.SUBMITTED

    @pytest.mark.asyncio
    async def test_unknown_reference_at_provider_is_pending(self, async_client, make_application, provider_api):
        await make_application()
        provider_api.paystack_verify_http_status = 404

        resp = await async_client.post("/api/payments/verify", json={"reference": "APP-123-1"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "pending"
        assert data["success"] is False
        assert provider_api.paths() == ["/transaction/verify/APP-123-1"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reference", ["APP-999-1", "T1234567890", "APP-456-1"])
    async def test_reference_not_owned_is_never_sent_to_provider(
        self, reference, async_client, make_application, provider_api
    ):
        await make_application(456, user_id=OTHER_USER_ID)

        resp = await async_client.post("/api/payments/verify", json={"reference": reference})

        assert resp.status_code == 200
        data = resp.json()
        assert data == {
            "success": False,
            "status": "pending",
            "transactionId": reference,
            "error": "Payment not found",
        }
        assert provider_api.requests == []

    @pytest.mark.asyncio
    async def test_provider_outage_is_pending_and_leaves_record(
        self, async_client, make_application, make_payment_record, provider_api, db_session
    ):
        await make_application()
        await make_payment_record(gateway=PaymentGateway.PESAPAL, gateway_reference="trk-1")
        provider_api.pesapal_status_raises = True

        resp = await async_client.post("/api/payments/verify", json={"reference": TX})

        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"
        record = await PaymentRecordRepository().get_by_transaction_id(db_session, TX)
        assert record.status is PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_foreign_payment_is_404(self, async_client, make_application, make_payment_record):
        await make_application(user_id=OTHER_USER_ID)
        await make_payment_record()

        resp = await async_client.post("/api/payments/verify", json={"reference": TX})

        assert resp.status_code == 404
