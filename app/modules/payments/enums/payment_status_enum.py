# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_status_enum.py

Enum de estados canónicos del pago.
Sincronizado con el tipo ENUM de PostgreSQL: payment_status_enum.

Todas las pasarelas traducen su vocabulario a estos cuatro valores.
Las únicas transiciones válidas salen de pending:

    pending -> completed | failed | cancelled

Un estado terminal no vuelve a cambiar.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from enum import StrEnum
from typing import Tuple

from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class PaymentStatus(StrEnum):
    """Estado canónico del pago, independiente de la pasarela."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    __pg_enum_name__ = "payment_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "payment_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)

    @property
    def is_terminal(self) -> bool:
        return self is not PaymentStatus.PENDING

    def can_transition_to(self, target: "PaymentStatus") -> bool:
        """True solo para pending -> estado terminal."""
        return self is PaymentStatus.PENDING and target.is_terminal

    def predecessors(self) -> Tuple["PaymentStatus", ...]:
        """Estados desde los que se puede llegar a este (para escrituras condicionales)."""
        return tuple(s for s in PaymentStatus if s.can_transition_to(self))


__all__ = ["PaymentStatus"]

# Fin del archivo backend/app/modules/payments/enums/payment_status_enum.py
