# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/adapters/test_pesapal_adapter.py

PesapalAdapter (API v3) contra la API simulada.
"""
import asyncio
import json

import pytest

from app.modules.payments.adapters.pesapal_adapter import PesapalAdapter
from app.modules.payments.enums import PaymentStatus
from app.modules.payments.schemas import PaymentInitParams
from app.modules.payments.services.webhooks import InboundWebhook
from tests.conftest import PESAPAL_SANDBOX

REFERENCE = "APP-123-1700000000000"
TRACKING_ID = "b945e4af-80a5-4ec1-8706-e03f8332fb04"


def _adapter(client, **overrides) -> PesapalAdapter:
    kwargs = dict(
        consumer_key="pesapal-ck",
        consumer_secret="pesapal-cs",
        base_url=PESAPAL_SANDBOX,
        app_base_url="https://api.loanintake.test",
        ipn_id="ipn-configured-1",
    )
    kwargs.update(overrides)
    return PesapalAdapter(client, **kwargs)


@pytest.fixture
def adapter(gateway_http_client):
    return _adapter(gateway_http_client)


def _params(**overrides) -> PaymentInitParams:
    data = dict(
        amount=30000,
        currency="KES",
        reference=REFERENCE,
        customer_email="amina@example.com",
        customer_name="Amina Wanjiru Otieno",
        cancel_url="https://app.example.com/payment/cancelled",
        metadata={"application_id": 123, "phone": "+254700000000"},
    )
    data.update(overrides)
    return PaymentInitParams(**data)


def _ipn(**fields) -> InboundWebhook:
    return InboundWebhook(fields=fields, method="GET")


class TestInitialize:
    @pytest.mark.asyncio
    async def test_submit_order_uses_major_units_and_split_name(self, adapter, provider_api):
        result = await adapter.initialize(_params())

        assert result.success is True
        assert result.transaction_id == REFERENCE
        assert result.redirect_url and result.payment_url == result.redirect_url
        assert result.gateway_reference == TRACKING_ID

        order = json.loads(provider_api.requests[-1].content)
        assert order["id"] == REFERENCE
        assert order["amount"] == 300.0
        assert order["notification_id"] == "ipn-configured-1"
        assert order["cancellation_url"] == "https://app.example.com/payment/cancelled"
        assert order["billing_address"]["first_name"] == "Amina"
        assert order["billing_address"]["last_name"] == "Wanjiru Otieno"
        assert provider_api.requests[-1].headers["Authorization"] == "Bearer pesapal-token"

    @pytest.mark.asyncio
    async def test_token_is_cached_between_calls(self, adapter, provider_api):
        await adapter.initialize(_params())
        await adapter.initialize(_params(reference="APP-123-1700000000001"))

        token_calls = [p for p in provider_api.paths() if p.endswith("/api/Auth/RequestToken")]
        assert len(token_calls) == 1

    @pytest.mark.asyncio
    async def test_registers_ipn_once_when_not_configured(self, gateway_http_client, provider_api):
        adapter = _adapter(gateway_http_client, ipn_id=None)

        await adapter.initialize(_params())
        await adapter.initialize(_params(reference="APP-123-1700000000001"))

        register_calls = [r for r in provider_api.requests if r.url.path.endswith("/api/URLSetup/RegisterIPN")]
        assert len(register_calls) == 1
        assert json.loads(register_calls[0].content)["url"] == "https://api.loanintake.test/api/webhooks/pesapal"
        order = json.loads(provider_api.requests[-1].content)
        assert order["notification_id"] == "ipn-registered-1"


class TestVerify:
    @pytest.mark.asyncio
    async def test_completed_status_converts_amount_to_minor_units(self, adapter):
        status = await adapter.verify(REFERENCE, gateway_reference=TRACKING_ID)

        assert status.status is PaymentStatus.COMPLETED
        assert status.amount == 30000
        assert status.reference == REFERENCE
        assert status.gateway_reference == TRACKING_ID
        assert status.paid_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "description, expected",
        [
            ("Failed", PaymentStatus.FAILED),
            ("INVALID", PaymentStatus.FAILED),
            ("Reversed", PaymentStatus.CANCELLED),
            ("Cancelled", PaymentStatus.CANCELLED),
        ],
    )
    async def test_status_mapping(self, adapter, provider_api, description, expected):
        provider_api.pesapal_status["payment_status_description"] = description

        status = await adapter.verify(REFERENCE, gateway_reference=TRACKING_ID)

        assert status.status is expected
        assert status.paid_at is None

    @pytest.mark.asyncio
    async def test_unknown_order_is_pending(self, adapter, provider_api):
        provider_api.pesapal_status = {"error": {"message": "Order not found"}}

        status = await adapter.verify(REFERENCE, gateway_reference=TRACKING_ID)

        assert status.status is PaymentStatus.PENDING
        assert status.error == "Order not found"


class TestParseIPN:
    @pytest.mark.asyncio
    async def test_v3_ipn_is_confirmed_through_the_api(self, adapter, provider_api):
        result = await adapter.parse_webhook(
            _ipn(OrderTrackingId=TRACKING_ID, OrderMerchantReference=REFERENCE, OrderNotificationType="IPNCHANGE")
        )

        assert result.success is True
        assert result.transaction_id == REFERENCE
        assert result.gateway_reference == TRACKING_ID
        assert result.status is PaymentStatus.COMPLETED
        assert result.should_update_database is True
        assert any(p.endswith("/GetTransactionStatus") for p in provider_api.paths())

    @pytest.mark.asyncio
    async def test_ipn_status_is_not_trusted(self, adapter, provider_api):
        """El estado que trae la IPN se ignora: manda el que reporta la API."""
        provider_api.pesapal_status["payment_status_description"] = "Failed"

        result = await adapter.parse_webhook(
            _ipn(pesapal_merchant_reference=REFERENCE, pesapal_transaction_tracking_id=TRACKING_ID, status="COMPLETED")
        )

        assert result.status is PaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_verification_failure_rejects(self, adapter, provider_api):
        provider_api.pesapal_status_raises = True

        result = await adapter.parse_webhook(_ipn(OrderTrackingId=TRACKING_ID, OrderMerchantReference=REFERENCE))

        assert result.success is False
        assert result.error.startswith("verification_failed")

    @pytest.mark.asyncio
    async def test_verification_timeout_rejects(self, adapter, monkeypatch):
        adapter.verify_timeout_seconds = 0.01

        async def _slow_verify(reference, gateway_reference=None):
            await asyncio.sleep(1)

        monkeypatch.setattr(adapter, "verify", _slow_verify)

        result = await adapter.parse_webhook(_ipn(OrderTrackingId=TRACKING_ID, OrderMerchantReference=REFERENCE))

        assert result.success is False
        assert result.error.startswith("verification_failed")

    @pytest.mark.asyncio
    async def test_merchant_reference_mismatch_rejects(self, adapter, provider_api):
        provider_api.pesapal_merchant_reference = "APP-999-1700000000000"

        result = await adapter.parse_webhook(_ipn(OrderTrackingId=TRACKING_ID, OrderMerchantReference=REFERENCE))

        assert result.success is False
        assert "mismatch" in result.error

    @pytest.mark.asyncio
    async def test_ipn_without_correlation_is_flagged(self, adapter, provider_api):
        result = await adapter.parse_webhook(_ipn(OrderNotificationType="IPNCHANGE"))

        assert result.success is True
        assert result.has_correlation is False
        assert result.status is PaymentStatus.PENDING
        assert provider_api.requests == []

    @pytest.mark.asyncio
    async def test_trusting_mode_maps_ipn_status_directly(self, gateway_http_client, provider_api):
        adapter = _adapter(gateway_http_client, verify_ipn_via_api=False)

        result = await adapter.parse_webhook(
            _ipn(pesapal_merchant_reference=REFERENCE, pesapal_transaction_tracking_id=TRACKING_ID, status="COMPLETED")
        )

        assert result.status is PaymentStatus.COMPLETED
        assert provider_api.requests == []
