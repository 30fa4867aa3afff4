# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_gateway_enum.py

Enum de pasarelas de pago soportadas.
Sincronizado con el tipo ENUM de PostgreSQL: payment_gateway_enum.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from enum import StrEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class PaymentGateway(StrEnum):
    """Pasarela de pago externa."""

    PAYSTACK = "paystack"
    PESAPAL = "pesapal"

    __pg_enum_name__ = "payment_gateway_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "payment_gateway_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)

    @classmethod
    def parse(cls, value: object) -> "PaymentGateway | None":
        """Convierte un identificador libre ("Paystack", " pesapal ") al enum, o None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


__all__ = ["PaymentGateway"]

# Fin del archivo backend/app/modules/payments/enums/payment_gateway_enum.py
