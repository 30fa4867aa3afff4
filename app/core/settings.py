# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración: reexpone `app.shared.config` bajo `app.core`.
"""

from typing import cast

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings


def get_settings() -> BaseAppSettings:
    """
    Configuración global de la aplicación (según PYTHON_ENV).
    """
    return cast(BaseAppSettings, _get_settings())


__all__ = ["get_settings", "get_payments_settings", "BaseAppSettings", "PaymentsSettings"]

# Fin del archivo backend/app/core/settings.py
