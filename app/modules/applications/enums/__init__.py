# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/enums/__init__.py

Superficie de exportación de enums del módulo Applications.
"""

from .application_status_enum import ApplicationStatus

__all__ = ["ApplicationStatus"]

# Fin del archivo backend/app/modules/applications/enums/__init__.py
