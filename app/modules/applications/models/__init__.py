# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/models/__init__.py

Modelos ORM del módulo Applications.

Se importa también PaymentRecord para que SQLAlchemy resuelva las
relaciones declaradas por nombre ('PaymentRecord') al configurar mappers.
"""

from __future__ import annotations

from .application_models import Application
from .nda_signature_models import NDASignature
from app.modules.payments.models.payment_record_models import PaymentRecord  # noqa: F401

__all__ = ["Application", "NDASignature"]

# Fin del archivo backend/app/modules/applications/models/__init__.py
