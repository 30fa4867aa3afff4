# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Punto de entrada del paquete de fachadas del módulo Payments.

Diseño:
- Para evitar dependencias circulares (la fachada de webhooks depende del
  derivador de solicitudes), este __init__ NO importa submódulos.

  Ejemplo de uso:

      from app.modules.payments.facades.webhooks.reconciler import WebhookReconciler
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
