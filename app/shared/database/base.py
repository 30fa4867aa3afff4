# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa de los modelos ORM de LoanIntake (applications,
nda_signatures, payment_records) y helper para los tipos ENUM de
PostgreSQL.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import MetaData
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM
from sqlalchemy.orm import DeclarativeBase

# Nombres estables de constraints (las migraciones SQL los referencian)
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def as_pg_enum(
    enum_cls: Type[Enum],
    name: str | None = None,
    schema: str | None = "public",
) -> PG_ENUM:
    """
    ENUM de PostgreSQL que persiste el ``value`` de cada miembro.

    El tipo ya existe en la base (lo crean los scripts SQL), por eso
    create_type=False. Sin ``name`` se usa ``__pg_enum_name__`` del enum.

    Example:
        status: Mapped[PaymentStatus] = mapped_column(
            as_pg_enum(PaymentStatus, name="payment_status_enum"),
        )
    """
    enum_name = name or getattr(enum_cls, "__pg_enum_name__", enum_cls.__name__.lower())
    return PG_ENUM(
        enum_cls,
        name=enum_name,
        schema=schema,
        create_type=False,
        values_callable=lambda members: [m.value for m in members],
    )


__all__ = ["Base", "NAMING_CONVENTION", "as_pg_enum"]

# Fin del archivo backend/app/shared/database/base.py
