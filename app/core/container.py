# -*- coding: utf-8 -*-
"""
backend/app/core/container.py

Contenedor de dependencias del proceso.

Se construye una vez en el lifespan de FastAPI y se guarda en
``app.state.container``; los handlers lo reciben vía ``Depends(get_container)``
en lugar de importar instancias globales. En tests se sustituye con
``app.dependency_overrides[get_container]``.

Contenido:
- httpx.AsyncClient compartido (timeouts de salida acotados)
- registro {PaymentGateway -> adaptador}
- PaymentService (orquestador)
- ApplicationStatusDeriver y WebhookReconciler
- repositorios

Autor: LoanIntake
Fecha: 2026-10-02
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from app.shared.config import BaseAppSettings, PaymentsSettings, get_payments_settings, get_settings
from app.modules.applications.repositories import ApplicationRepository, NDASignatureRepository
from app.modules.applications.services.status_deriver import ApplicationStatusDeriver
from app.modules.payments.adapters import build_gateway_registry
from app.modules.payments.facades.webhooks.reconciler import WebhookReconciler
from app.modules.payments.repositories.payment_record_repository import PaymentRecordRepository
from app.modules.payments.services.payment_service import PaymentService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: BaseAppSettings
    payments_settings: PaymentsSettings
    http_client: Optional[httpx.AsyncClient]
    payment_service: PaymentService
    payment_repo: PaymentRecordRepository
    application_repo: ApplicationRepository
    nda_repo: NDASignatureRepository
    deriver: ApplicationStatusDeriver
    reconciler: WebhookReconciler

    async def aclose(self) -> None:
        if self.http_client is not None and not self.http_client.is_closed:
            await self.http_client.aclose()


def build_container(
    settings: Optional[BaseAppSettings] = None,
    payments_settings: Optional[PaymentsSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    payment_service: Optional[PaymentService] = None,
) -> ServiceContainer:
    """
    Arma el contenedor. Cualquier pieza puede inyectarse (tests).
    """
    settings = settings or get_settings()
    payments_settings = payments_settings or get_payments_settings()

    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                payments_settings.payments_gateway_read_timeout,
                connect=payments_settings.payments_gateway_connect_timeout,
            ),
            headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
        )

    if payment_service is None:
        registry = build_gateway_registry(payments_settings, http_client, settings.app_base_url)
        payment_service = PaymentService(
            registry,
            default_gateway=payments_settings.payments_default_gateway,
            call_timeout_seconds=payments_settings.payments_gateway_call_timeout_seconds,
            webhook_timeout_seconds=payments_settings.payments_webhook_timeout_seconds,
        )

    payment_repo = PaymentRecordRepository()
    application_repo = ApplicationRepository()
    nda_repo = NDASignatureRepository()
    deriver = ApplicationStatusDeriver(application_repo, nda_repo, payment_repo)
    reconciler = WebhookReconciler(payment_repo, deriver)

    logger.info("container_built gateways=%s", payment_service.get_available_gateways())
    return ServiceContainer(
        settings=settings,
        payments_settings=payments_settings,
        http_client=http_client,
        payment_service=payment_service,
        payment_repo=payment_repo,
        application_repo=application_repo,
        nda_repo=nda_repo,
        deriver=deriver,
        reconciler=reconciler,
    )


def get_container(request: Request) -> ServiceContainer:
    """Dependencia FastAPI: contenedor construido en el lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Service container not initialised; is the app lifespan running?")
    return container


__all__ = ["ServiceContainer", "build_container", "get_container"]

# Fin del archivo backend/app/core/container.py
