# -*- coding: utf-8 -*-
"""
backend/tests/test_health.py

Health check, raíz y /metrics.
"""
import pytest


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_reports_gateways(self, async_client):
        resp = await async_client.get("/health")

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] in ("ok", "degraded")
        assert data["environment"] == "test"
        assert "service" in data

    @pytest.mark.asyncio
    async def test_root(self, async_client):
        resp = await async_client.get("/")
        assert resp.json()["status"] == "active"


class TestMetricsEndpoint:
    @pytest.mark.asyncio
    async def test_exposes_payment_metrics(self, async_client):
        resp = await async_client.get("/api/payments/initialize")
        assert resp.status_code == 200

        resp = await async_client.get("/metrics")

        assert resp.status_code == 200
        assert "http_requests_total" in resp.text
        assert "payments_reconciliation_outcome_total" in resp.text
