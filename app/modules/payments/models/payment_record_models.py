# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_record_models.py

Modelo ORM para la tabla payment_records.

Un PaymentRecord se crea (pending) al inicializar el pago, antes de redirigir
al pagador, y solo lo mutan el reconciliador de webhooks o una verificación
explícita. Nunca se borra.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow
from app.modules.payments.enums import PaymentGateway, PaymentStatus

if TYPE_CHECKING:
    from app.modules.applications.models.application_models import Application


class PaymentRecord(Base):
    """Intento de pago de la cuota de solicitud en una pasarela."""

    __tablename__ = "payment_records"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)

    application_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Solicitud dueña del pago.",
    )

    payment_gateway: Mapped[PaymentGateway] = mapped_column(
        PaymentGateway.as_pg_enum(),
        nullable=False,
    )

    # Referencia del proveedor, única por intento
    gateway_transaction_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Referencia del intento en la pasarela (p. ej. APP-{id}-{ts}).",
    )

    # Correlación secundaria (p. ej. OrderTrackingId de Pesapal)
    gateway_reference: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        index=True,
    )

    amount: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        doc="Monto en unidades menores (centavos, kobo).",
    )

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    status: Mapped[PaymentStatus] = mapped_column(
        PaymentStatus.as_pg_enum(),
        nullable=False,
        index=True,
        default=PaymentStatus.PENDING,
    )

    # Payload del proveedor tal cual, para auditoría
    gateway_response: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    application: Mapped["Application"] = relationship(
        "Application",
        back_populates="payment_records",
        lazy="noload",
    )

    __table_args__ = (
        UniqueConstraint(
            "payment_gateway",
            "gateway_transaction_id",
            name="uq_payment_records_gateway_tx",
        ),
        Index("ix_payment_records_application_status", "application_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<PaymentRecord id={self.id} gateway={self.payment_gateway} "
            f"tx={self.gateway_transaction_id} status={self.status}>"
        )

# Fin del archivo backend/app/modules/payments/models/payment_record_models.py
