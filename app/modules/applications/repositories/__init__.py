# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/repositories/__init__.py
"""

from .application_repository import ApplicationRepository
from .nda_signature_repository import NDASignatureRepository

__all__ = ["ApplicationRepository", "NDASignatureRepository"]
