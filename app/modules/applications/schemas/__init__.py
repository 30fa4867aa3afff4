# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/schemas/__init__.py
"""

from .application_schemas import UpdateStatusRequest, UpdateStatusResponse

__all__ = ["UpdateStatusRequest", "UpdateStatusResponse"]
