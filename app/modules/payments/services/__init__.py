# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/__init__.py

Servicios del módulo Payments:
- payment_service: PaymentService (orquestador), UnknownGatewayError
- currency_service: monedas y unidades
- webhooks: lectura de callbacks y firmas

Se importan desde su módulo concreto (los adaptadores dependen de
services.webhooks y el orquestador de los adaptadores).
"""
