# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/routes/__init__.py
"""

from fastapi import APIRouter

from .applications import router as applications_router

router = APIRouter()
router.include_router(applications_router, prefix="/applications")

__all__ = ["router"]
