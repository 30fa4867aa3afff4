# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Repositorios del módulo Payments.
"""

from .payment_record_repository import PaymentRecordRepository, StatusWriteOutcome

__all__ = ["PaymentRecordRepository", "StatusWriteOutcome"]
