# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/models/nda_signature_models.py

Modelo ORM para la tabla nda_signatures.

La firma la produce el subsistema de firma de NDA; aquí solo se consume
como hecho para la derivación de estado. Una firma por solicitud.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.shared.utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .application_models import Application


class NDASignature(Base):
    __tablename__ = "nda_signatures"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)

    application_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Referencia a la imagen de la firma (base64 o ruta en storage)
    signature_data: Mapped[str] = mapped_column(Text, nullable=False)

    signed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    application: Mapped["Application"] = relationship(
        "Application",
        back_populates="nda_signature",
        lazy="noload",
    )

    __table_args__ = (
        UniqueConstraint("application_id", name="uq_nda_signatures_application"),
    )

    def __repr__(self) -> str:
        return f"<NDASignature id={self.id} application_id={self.application_id}>"

# Fin del archivo backend/app/modules/applications/models/nda_signature_models.py
