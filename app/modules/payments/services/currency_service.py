# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/currency_service.py

Monedas soportadas y conversión entre unidades menores y mayores.

Todo el sistema guarda montos en unidades menores (centavos, kobo);
Pesapal espera el monto en unidades mayores con dos decimales.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

# Código ISO 4217 -> (exponente de unidad menor, símbolo)
SUPPORTED_CURRENCIES: Dict[str, tuple[int, str]] = {
    "USD": (2, "$"),
    "KES": (2, "KSh"),
    "NGN": (2, "₦"),
    "GHS": (2, "GH₵"),
    "ZAR": (2, "R"),
}


def normalize_currency(code: str) -> str:
    return (code or "").strip().upper()


def is_supported(code: str) -> bool:
    return normalize_currency(code) in SUPPORTED_CURRENCIES


def minor_unit_exponent(code: str) -> int:
    """Exponente de la unidad menor (2 para todas las monedas soportadas)."""
    entry = SUPPORTED_CURRENCIES.get(normalize_currency(code))
    return entry[0] if entry else 2


def to_major_units(amount_minor: int, code: str) -> Decimal:
    """
    30000 USD-centavos -> Decimal('300.00').

    Examples:
        >>> to_major_units(30000, "USD")
        Decimal('300.00')
    """
    exp = minor_unit_exponent(code)
    quantum = Decimal(1).scaleb(-exp)
    return (Decimal(int(amount_minor)) / (Decimal(10) ** exp)).quantize(quantum)


def to_minor_units(amount_major: object, code: str) -> int:
    """
    Convierte un monto mayor (str/float/Decimal del proveedor) a unidades menores.

    Examples:
        >>> to_minor_units("300.00", "KES")
        30000
        >>> to_minor_units(12.345, "USD")
        1235
    """
    exp = minor_unit_exponent(code)
    value = Decimal(str(amount_major)) * (Decimal(10) ** exp)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_amount(amount_minor: int, code: str) -> str:
    """
    Formato de presentación.

    Examples:
        >>> format_amount(30000, "USD")
        '$300.00'
        >>> format_amount(150000, "KES")
        'KSh 1,500.00'
    """
    code = normalize_currency(code)
    major = to_major_units(amount_minor, code)
    symbol = SUPPORTED_CURRENCIES.get(code, (2, code))[1]
    text = f"{major:,.{minor_unit_exponent(code)}f}"
    if len(symbol) > 1:
        return f"{symbol} {text}"
    return f"{symbol}{text}"


__all__ = [
    "SUPPORTED_CURRENCIES",
    "normalize_currency",
    "is_supported",
    "minor_unit_exponent",
    "to_major_units",
    "to_minor_units",
    "format_amount",
]
