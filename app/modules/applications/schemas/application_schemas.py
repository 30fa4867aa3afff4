# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/schemas/application_schemas.py

Esquemas del trigger de re-derivación de estado.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UpdateStatusRequest(_ApiModel):
    application_id: int = Field(gt=0)
    # Etiqueta de métrica: vocabulario cerrado
    trigger: Literal["nda_signed", "manual"] = "nda_signed"


class UpdateStatusResponse(_ApiModel):
    success: bool
    application_id: int
    status: Optional[str] = None
    changed: bool = False
    payment_completed: bool = False
    nda_signed: bool = False
    error: Optional[str] = None


__all__ = ["UpdateStatusRequest", "UpdateStatusResponse"]
