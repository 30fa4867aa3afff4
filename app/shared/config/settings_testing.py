# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Determinista: logging moderado, SQLite en memoria y un secreto JWT fijo
con el que los tests firman tokens.
"""

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    python_env: str = "test"

    log_level: str = "WARNING"
    log_format: str = "pretty"

    # Los tests sustituyen la sesión; la URL solo debe ser válida
    db_url: str = "sqlite+aiosqlite:///:memory:"

    supabase_jwt_secret: SecretStr = SecretStr("test-supabase-jwt-secret-with-32-chars!!")

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
