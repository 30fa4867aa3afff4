# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/services/__init__.py
"""

from .status_deriver import ApplicationStatusDeriver, DerivationOutcome, DerivationResult

__all__ = ["ApplicationStatusDeriver", "DerivationOutcome", "DerivationResult"]
