# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- PaymentGateway
- PaymentStatus

Autor: LoanIntake
Fecha: 2026-09-28
"""

from .payment_gateway_enum import PaymentGateway
from .payment_status_enum import PaymentStatus

__all__ = [
    "PaymentGateway",
    "PaymentStatus",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
