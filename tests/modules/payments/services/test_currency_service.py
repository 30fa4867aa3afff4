# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/services/test_currency_service.py
"""
from decimal import Decimal

import pytest

from app.modules.payments.services.currency_service import (
    format_amount,
    is_supported,
    normalize_currency,
    to_major_units,
    to_minor_units,
)


class TestCurrencySupport:
    @pytest.mark.parametrize("code", ["USD", "kes", " ngn ", "GHS", "ZAR"])
    def test_supported_codes(self, code):
        assert is_supported(code)

    def test_unsupported_code(self):
        assert is_supported("EUR") is False
        assert is_supported("") is False

    def test_normalize(self):
        assert normalize_currency(" kes ") == "KES"


class TestConversions:
    def test_minor_to_major_for_pesapal(self):
        assert to_major_units(30000, "USD") == Decimal("300.00")
        assert to_major_units(1, "KES") == Decimal("0.01")

    def test_major_to_minor_from_provider_values(self):
        assert to_minor_units("300.00", "USD") == 30000
        assert to_minor_units(300.0, "KES") == 30000
        assert to_minor_units(Decimal("1500.5"), "NGN") == 150050

    def test_major_to_minor_rounds_half_up(self):
        assert to_minor_units("12.345", "USD") == 1235


class TestFormatting:
    def test_single_char_symbol_has_no_space(self):
        assert format_amount(30000, "USD") == "$300.00"

    def test_multi_char_symbol_is_separated(self):
        assert format_amount(150000, "KES") == "KSh 1,500.00"
