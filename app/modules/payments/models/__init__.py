# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

Autor: LoanIntake
Fecha: 2026-09-28
"""

from __future__ import annotations

from .payment_record_models import PaymentRecord

__all__ = ["PaymentRecord"]

# Fin del archivo backend/app/modules/payments/models/__init__.py
