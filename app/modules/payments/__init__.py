# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos de LoanIntake.

Este módulo gestiona:
- Cobro de la cuota de solicitud vía Paystack y Pesapal
- Registros de pago (PaymentRecord); un estado terminal no cambia
- Webhooks/IPN de los proveedores y su reconciliación

Estructura:
- enums: PaymentGateway, PaymentStatus
- models: PaymentRecord
- schemas: contratos canónicos y de API
- adapters: un adaptador por pasarela (initialize, verify, parse_webhook)
- services: orquestador, moneda, webhooks entrantes
- facades: reconciliador de webhooks
- routes: /payments/* y /webhooks/*

Los submódulos se importan explícitamente (p. ej.
``from app.modules.payments.services.payment_service import PaymentService``);
este __init__ no reexporta nada para no crear ciclos con applications.
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/__init__.py
