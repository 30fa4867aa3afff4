# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Logging de LoanIntake vía logging.config.dictConfig.

Formatos:
- plain:  una línea por evento (desarrollo)
- pretty: igual que plain con el módulo alineado (consola local)
- json:   python-json-logger, un objeto por línea (producción)

Los eventos del dominio se escriben como ``evento clave=valor``
(p. ej. ``payment_status_write gateway=paystack ...``) para que sigan
siendo buscables en ambos formatos.
"""

import logging.config
from typing import Any, Dict, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["plain", "pretty", "json"]

_FORMATTERS: Dict[str, Dict[str, Any]] = {
    "plain": {"format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s"},
    "pretty": {"format": "%(asctime)s | %(levelname)-8s | %(name)-48s | %(message)s"},
    "json": {
        "()": "pythonjsonlogger.json.JsonFormatter",
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        "rename_fields": {"levelname": "level", "asctime": "ts"},
    },
}


def setup_logging(level: LogLevel = "INFO", fmt: LogFormat = "plain") -> None:
    """
    Configura el root logger con un único handler a stdout.

    Examples:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    formatter = fmt if fmt in _FORMATTERS else "plain"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {formatter: _FORMATTERS[formatter]},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {
                # httpx registra cada request a la pasarela en INFO
                "httpx": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "WARNING"},
                "uvicorn.access": {"level": "WARNING"},
            },
            "root": {"handlers": ["console"], "level": level.upper()},
        }
    )


__all__ = ["setup_logging"]
# Fin del archivo backend/app/shared/config/logging_config.py
