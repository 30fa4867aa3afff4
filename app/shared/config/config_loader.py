# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la clase de settings según PYTHON_ENV, validaciones de
seguridad y cacheo como singleton.
"""

import os
from functools import lru_cache
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

_SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: si las validaciones de producción fallan
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings = _SETTINGS_BY_ENV.get(env, DevSettings)()
    settings._security_checks()
    return settings


__all__ = ["get_settings"]
# Fin del archivo backend/app/shared/config/config_loader.py
