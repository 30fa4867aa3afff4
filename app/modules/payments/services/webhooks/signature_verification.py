# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/signature_verification.py

Verificación de firmas de webhooks.

- Paystack firma el body crudo con HMAC-SHA512 usando la secret key y
  envía el hex digest en ``x-paystack-signature``.
- Pesapal no firma sus IPN; su autenticidad se establece consultando
  GetTransactionStatus (ver PesapalAdapter.parse_webhook).

Fail-closed: sin secreto o sin header, la verificación es False.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

PAYSTACK_SIGNATURE_HEADER = "x-paystack-signature"


def compute_paystack_signature(payload: bytes, secret_key: str) -> str:
    return hmac.new(secret_key.encode("utf-8"), payload, hashlib.sha512).hexdigest()


def verify_paystack_signature(
    payload: bytes,
    signature_header: Optional[str],
    secret_key: Optional[str],
) -> bool:
    """
    Verifica la firma de un webhook de Paystack.

    Args:
        payload: Body crudo del request (sin re-serializar)
        signature_header: Valor de x-paystack-signature
        secret_key: Secret key de Paystack

    Returns:
        True si la firma es válida, False en caso contrario
    """
    if not signature_header:
        logger.warning("Paystack webhook rechazado: falta header %s", PAYSTACK_SIGNATURE_HEADER)
        return False

    if not secret_key:
        logger.error("Paystack webhook rechazado: PAYSTACK_SECRET_KEY no configurado.")
        return False

    expected = compute_paystack_signature(payload, secret_key)
    if not hmac.compare_digest(expected, signature_header.strip().lower()):
        logger.warning("Paystack webhook rechazado: firma inválida")
        return False
    return True


__all__ = [
    "PAYSTACK_SIGNATURE_HEADER",
    "compute_paystack_signature",
    "verify_paystack_signature",
]
