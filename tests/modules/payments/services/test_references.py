# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/services/test_references.py

Convención APP-{applicationId}-{timestamp}.
"""
import pytest

from app.modules.payments.services.references import (
    build_transaction_id,
    parse_application_id,
    resolve_application_id,
)


def test_build_transaction_id_uses_convention():
    assert build_transaction_id(123, 1700000000000) == "APP-123-1700000000000"


def test_build_transaction_id_defaults_to_current_millis():
    tx = build_transaction_id(7)
    prefix, app_id, ts = tx.split("-")
    assert (prefix, app_id) == ("APP", "7")
    assert len(ts) >= 13


def test_parse_takes_second_segment():
    assert parse_application_id("APP-123-1700000000000") == 123


@pytest.mark.parametrize("reference", [None, "", "APP", "APP-abc-1", "APP-0-1", "ref_xyz"])
def test_parse_rejects_unusable_references(reference):
    assert parse_application_id(reference) is None


def test_metadata_application_id_wins_over_reference():
    assert resolve_application_id({"application_id": "77"}, "APP-123-1700000000000") == 77
    assert resolve_application_id({"applicationId": 55}, None) == 55


def test_falls_back_to_reference_without_metadata():
    assert resolve_application_id({}, "APP-123-1700000000000") == 123


def test_invalid_metadata_value_is_rejected():
    assert resolve_application_id({"application_id": "not-a-number"}, "APP-123-1") is None
