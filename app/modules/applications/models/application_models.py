# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/models/application_models.py

Modelo ORM para la tabla applications.

Autor: LoanIntake
Fecha: 2026-09-29
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow
from app.modules.applications.enums import ApplicationStatus

if TYPE_CHECKING:
    from app.modules.payments.models.payment_record_models import PaymentRecord
    from .nda_signature_models import NDASignature


class Application(Base):
    """Solicitud de préstamo de un usuario."""

    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)

    # sub del proveedor de identidad (UUID de Supabase)
    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )

    status: Mapped[ApplicationStatus] = mapped_column(
        ApplicationStatus.as_pg_enum(),
        nullable=False,
        default=ApplicationStatus.DRAFT,
    )

    # Monto solicitado, industria, etc. (capturado por los formularios)
    application_data: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)

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

    payment_records: Mapped[List["PaymentRecord"]] = relationship(
        "PaymentRecord",
        back_populates="application",
        lazy="noload",
    )

    nda_signature: Mapped[Optional["NDASignature"]] = relationship(
        "NDASignature",
        back_populates="application",
        uselist=False,
        lazy="noload",
    )

    __table_args__ = (
        Index("ix_applications_user_status", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Application id={self.id} status={self.status}>"

# Fin del archivo backend/app/modules/applications/models/application_models.py
