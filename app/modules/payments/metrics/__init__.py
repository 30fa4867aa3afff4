# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Métricas Prometheus del módulo Payments.
"""

from .exporters.prometheus_exporter import (
    registry as PAYMENTS_REGISTRY,
    render_prometheus_metrics,
    observe_payment_initialized,
    observe_payment_verified,
    observe_webhook_received,
    observe_webhook_rejected,
    observe_reconciliation,
    observe_reconciliation_backlog,
    observe_status_derivation,
)

__all__ = [
    "PAYMENTS_REGISTRY",
    "render_prometheus_metrics",
    "observe_payment_initialized",
    "observe_payment_verified",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_reconciliation",
    "observe_reconciliation_backlog",
    "observe_status_derivation",
]
