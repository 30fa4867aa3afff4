# -*- coding: utf-8 -*-
"""
backend/app/observability/prom.py

Observabilidad Prometheus de LoanIntake.

- PrometheusMiddleware: conteo y latencia HTTP por plantilla de ruta
- /metrics: registry HTTP (o multiproceso) + registry del módulo Payments
"""
from __future__ import annotations

import os
from time import perf_counter
from typing import Optional

from fastapi import FastAPI
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.modules.payments.metrics import render_prometheus_metrics

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Requests HTTP por método, plantilla de ruta y status",
    ["method", "path", "status"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "http_request_latency_seconds",
    "Latencia HTTP (s)",
    ["method", "path", "status"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0),
)


def _route_template(request) -> str:
    # /api/x/{id} en lugar del path real (cardinalidad acotada)
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = perf_counter()
        response = await call_next(request)
        labels = (request.method, _route_template(request), str(response.status_code))
        HTTP_REQUEST_SECONDS.labels(*labels).observe(perf_counter() - start)
        HTTP_REQUESTS_TOTAL.labels(*labels).inc()
        return response


def _http_registry() -> CollectorRegistry:
    """Registry multiproceso si PROMETHEUS_MULTIPROC_DIR está definido."""
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return registry
    return REGISTRY


def mount_metrics(app: FastAPI, path: str = "/metrics", registry: Optional[CollectorRegistry] = None) -> None:
    http_registry = registry or _http_registry()

    @app.get(path, include_in_schema=False)
    def metrics() -> Response:
        payload = generate_latest(http_registry) + render_prometheus_metrics()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


def setup_observability(app: FastAPI) -> None:
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)


__all__ = ["PrometheusMiddleware", "mount_metrics", "setup_observability"]

# Fin del archivo backend/app/observability/prom.py
