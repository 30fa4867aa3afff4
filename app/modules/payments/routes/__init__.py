# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- /payments/initialize (GET, POST)
- /payments/verify
- /webhooks/paystack
- /webhooks/pesapal (GET, POST)
"""

from fastapi import APIRouter

from .payments import router as payments_router
from .webhooks_paystack import router as webhooks_paystack_router
from .webhooks_pesapal import router as webhooks_pesapal_router

router = APIRouter()

router.include_router(payments_router, prefix="/payments")
router.include_router(webhooks_paystack_router, prefix="/webhooks")
router.include_router(webhooks_pesapal_router, prefix="/webhooks")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
