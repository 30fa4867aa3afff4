# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/enums/application_status_enum.py

Enum del ciclo de vida de una solicitud de préstamo.
Sincronizado con el tipo ENUM de PostgreSQL: application_status_enum.

La única transición automática es draft -> submitted. El resto
(under_review, approved, rejected) solo las aplica un administrador.

Autor: LoanIntake
Fecha: 2026-09-29
"""

from enum import StrEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class ApplicationStatus(StrEnum):
    """Estado de la solicitud."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"

    __pg_enum_name__ = "application_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "application_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)

    @property
    def is_derivable(self) -> bool:
        """Solo una solicitud en draft admite derivación automática."""
        return self is ApplicationStatus.DRAFT


__all__ = ["ApplicationStatus"]

# Fin del archivo backend/app/modules/applications/enums/application_status_enum.py
