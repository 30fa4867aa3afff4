# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pasarelas de pago (Paystack, Pesapal) para LoanIntake.

Descripción:
    Centraliza credenciales, entornos, timeouts y flags de seguridad
    de webhooks. Una pasarela solo se registra si sus credenciales
    están completas (ver paystack_configured / pesapal_configured).

Autor: LoanIntake
Fecha: 2026-09-28
"""

from __future__ import annotations

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PESAPAL_BASE_URLS = {
    "sandbox": "https://cybqa.pesapal.com/pesapalv3",
    "live": "https://pay.pesapal.com/v3",
}


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    # =========================================================================
    # PAYSTACK
    # =========================================================================

    paystack_secret_key: Optional[str] = Field(
        default=None,
        description="Paystack secret key (sk_live_... o sk_test_...); también firma los webhooks",
    )

    paystack_public_key: Optional[str] = Field(
        default=None,
        description="Paystack public key (pk_live_... o pk_test_...)",
    )

    paystack_environment: Literal["test", "live"] = Field(
        default="test",
        description="Modo de Paystack; lo determina la clave usada, aquí solo se registra",
    )

    paystack_base_url: str = Field(
        default="https://api.paystack.co",
        description="URL base de la API de Paystack",
    )

    paystack_require_signature: bool = Field(
        default=True,
        description="Rechaza webhooks de Paystack sin x-paystack-signature válida",
    )

    # =========================================================================
    # PESAPAL
    # =========================================================================

    pesapal_consumer_key: Optional[str] = Field(default=None, description="Pesapal consumer key")

    pesapal_consumer_secret: Optional[str] = Field(default=None, description="Pesapal consumer secret")

    pesapal_environment: Literal["sandbox", "live"] = Field(
        default="sandbox",
        description="Entorno de Pesapal: 'sandbox' o 'live'",
    )

    pesapal_ipn_id: Optional[str] = Field(
        default=None,
        description="notification_id de la IPN registrada; si falta se registra al primer pago",
    )

    pesapal_verify_ipn_via_api: bool = Field(
        default=True,
        description="Confirma cada IPN consultando GetTransactionStatus antes de persistir",
    )

    # =========================================================================
    # ORQUESTACIÓN
    # =========================================================================

    payments_default_gateway: str = Field(
        default="paystack",
        description="Pasarela usada cuando la petición no indica una",
    )

    payments_default_currency: str = Field(default="USD", description="Moneda por defecto")

    # =========================================================================
    # TIMEOUTS
    # =========================================================================

    payments_gateway_connect_timeout: float = Field(default=3.0, description="Timeout de conexión (s)")

    payments_gateway_read_timeout: float = Field(default=6.0, description="Timeout de lectura (s)")

    payments_gateway_call_timeout_seconds: float = Field(
        default=8.0,
        description="Límite total de una llamada saliente a pasarela (incluida la verificación de una IPN)",
    )

    payments_webhook_timeout_seconds: float = Field(
        default=15.0,
        description="Plazo del handler de webhook; mayor que el de la llamada saliente",
    )

    @field_validator(
        "paystack_secret_key",
        "paystack_public_key",
        "pesapal_consumer_key",
        "pesapal_consumer_secret",
        "pesapal_ipn_id",
        mode="before",
    )
    @classmethod
    def _blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("payments_default_gateway", mode="before")
    @classmethod
    def _normalize_gateway(cls, v: str) -> str:
        return (v or "paystack").strip().lower()

    @model_validator(mode="after")
    def _call_timeout_below_webhook_deadline(self) -> "PaymentsSettings":
        # La verificación saliente debe expirar antes que el handler que la envuelve
        if self.payments_gateway_call_timeout_seconds >= self.payments_webhook_timeout_seconds:
            raise ValueError(
                "PAYMENTS_GATEWAY_CALL_TIMEOUT_SECONDS must be lower than PAYMENTS_WEBHOOK_TIMEOUT_SECONDS"
            )
        return self

    @property
    def paystack_configured(self) -> bool:
        return bool(self.paystack_secret_key)

    @property
    def pesapal_configured(self) -> bool:
        return bool(self.pesapal_consumer_key and self.pesapal_consumer_secret)

    @property
    def pesapal_base_url(self) -> str:
        return PESAPAL_BASE_URLS[self.pesapal_environment]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


__all__ = [
    "PESAPAL_BASE_URLS",
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
