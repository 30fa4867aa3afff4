# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/services/test_inbound_webhook.py

Decodificación de callbacks y firma HMAC-SHA512 de Paystack.
"""
import hashlib
import hmac

from app.modules.payments.services.webhooks import (
    InboundWebhook,
    compute_paystack_signature,
    parse_body,
    verify_paystack_signature,
)

SECRET = "sk_test_secret"
PAYLOAD = b'{"event":"charge.success","data":{"reference":"APP-123-1700000000000"}}'


class TestParseBody:
    def test_json(self):
        assert parse_body(PAYLOAD, "application/json")["event"] == "charge.success"

    def test_json_detected_without_content_type(self):
        assert parse_body(PAYLOAD)["data"]["reference"] == "APP-123-1700000000000"

    def test_form_urlencoded(self):
        fields = parse_body(b"reference=APP-123-1&status=success", "application/x-www-form-urlencoded")
        assert fields == {"reference": "APP-123-1", "status": "success"}

    def test_invalid_json_is_empty(self):
        assert parse_body(b"{not json", "application/json") == {}

    def test_empty_body(self):
        assert parse_body(b"", "application/json") == {}

    def test_non_object_json_is_empty(self):
        assert parse_body(b"[1, 2]", "application/json") == {}


class TestInboundWebhookGet:
    def test_first_non_empty_value_wins(self):
        inbound = InboundWebhook(fields={"OrderTrackingId": "", "orderTrackingId": "trk-1"})
        assert inbound.get("OrderTrackingId", "orderTrackingId") == "trk-1"

    def test_missing(self):
        assert InboundWebhook().get("reference") is None


class TestPaystackSignature:
    def test_matches_hmac_sha512_hexdigest(self):
        expected = hmac.new(SECRET.encode(), PAYLOAD, hashlib.sha512).hexdigest()
        assert compute_paystack_signature(PAYLOAD, SECRET) == expected

    def test_valid_signature(self):
        assert verify_paystack_signature(PAYLOAD, compute_paystack_signature(PAYLOAD, SECRET), SECRET)

    def test_uppercase_header_is_accepted(self):
        signature = compute_paystack_signature(PAYLOAD, SECRET).upper()
        assert verify_paystack_signature(PAYLOAD, signature, SECRET)

    def test_tampered_body(self):
        signature = compute_paystack_signature(PAYLOAD, SECRET)
        assert verify_paystack_signature(PAYLOAD + b" ", signature, SECRET) is False

    def test_missing_header_fails_closed(self):
        assert verify_paystack_signature(PAYLOAD, None, SECRET) is False

    def test_missing_secret_fails_closed(self):
        assert verify_paystack_signature(PAYLOAD, "abc", None) is False
