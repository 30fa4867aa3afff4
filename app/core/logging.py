# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada de `app.shared.config.logging_config` bajo `app.core`.
"""

from app.shared.config.logging_config import LogFormat, LogLevel, setup_logging

__all__ = ["LogFormat", "LogLevel", "setup_logging"]

# Fin del archivo backend/app/core/logging.py
