# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/__init__.py

Fachada de reconciliación de webhooks.
"""

from .reconciler import (
    ReconcileOutcome,
    ReconcileReport,
    WebhookPayloadError,
    WebhookReconciler,
)

__all__ = [
    "ReconcileOutcome",
    "ReconcileReport",
    "WebhookPayloadError",
    "WebhookReconciler",
]
