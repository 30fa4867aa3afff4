# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Registro propio (PAYMENTS_REGISTRY) que /metrics concatena al global.

Autor: LoanIntake
Fecha: 2026-09-30
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

PAYMENT_INIT_TOTAL = Counter(
    "payments_initialize_total",
    "Inicializaciones de pago por pasarela y resultado",
    ["gateway", "outcome"],  # outcome: success/failure/unknown_gateway
    registry=registry,
)

PAYMENT_VERIFY_TOTAL = Counter(
    "payments_verify_total",
    "Verificaciones de pago por pasarela y estado canónico",
    ["gateway", "status"],
    registry=registry,
)

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks recibidos por pasarela",
    ["gateway"],
    registry=registry,
)

WEBHOOKS_REJECTED_TOTAL = Counter(
    "payments_webhook_rejected_total",
    "Total webhooks rechazados por pasarela y razón",
    ["gateway", "reason"],  # reason: invalid_signature/verification_failed/malformed
    registry=registry,
)

RECONCILIATION_OUTCOME_TOTAL = Counter(
    "payments_reconciliation_outcome_total",
    "Resultado de la reconciliación por pasarela",
    ["gateway", "outcome"],
    registry=registry,
)

RECONCILIATION_BACKLOG_TOTAL = Counter(
    "payments_reconciliation_backlog_total",
    "Webhooks verificados cuya persistencia falló (requieren reconciliación manual)",
    ["gateway"],
    registry=registry,
)

WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "payments_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["gateway"],
    registry=registry,
)

STATUS_DERIVATION_TOTAL = Counter(
    "applications_status_derivation_total",
    "Derivaciones de estado de solicitud por disparador y resultado",
    ["trigger", "outcome"],  # outcome: promoted/unchanged/not_found/error
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Genera la salida actual de las métricas del módulo en formato Prometheus."""
    return generate_latest(registry)


def observe_payment_initialized(gateway: str, outcome: str) -> None:
    PAYMENT_INIT_TOTAL.labels(gateway=gateway, outcome=outcome).inc()


def observe_payment_verified(gateway: str, status: str) -> None:
    PAYMENT_VERIFY_TOTAL.labels(gateway=gateway, status=status).inc()


def observe_webhook_received(gateway: str) -> None:
    """Registra recepción de un webhook."""
    WEBHOOKS_RECEIVED_TOTAL.labels(gateway=gateway).inc()


def observe_webhook_rejected(gateway: str, reason: str) -> None:
    """
    Registra webhook rechazado.

    Args:
        gateway: paystack/pesapal
        reason: invalid_signature/verification_failed/malformed
    """
    WEBHOOKS_REJECTED_TOTAL.labels(gateway=gateway, reason=reason).inc()
    logger.debug("[Prometheus] Webhook %s rejected reason=%s", gateway, reason)


def observe_reconciliation(gateway: str, outcome: str, duration: float) -> None:
    RECONCILIATION_OUTCOME_TOTAL.labels(gateway=gateway, outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(gateway=gateway).observe(duration)


def observe_reconciliation_backlog(gateway: str) -> None:
    RECONCILIATION_BACKLOG_TOTAL.labels(gateway=gateway).inc()


def observe_status_derivation(trigger: str, outcome: str) -> None:
    STATUS_DERIVATION_TOTAL.labels(trigger=trigger, outcome=outcome).inc()


__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_payment_initialized",
    "observe_payment_verified",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_reconciliation",
    "observe_reconciliation_backlog",
    "observe_status_derivation",
]

# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
