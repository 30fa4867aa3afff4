# -*- coding: utf-8 -*-
"""
backend/app/shared/auth_context.py

Identidad del usuario autenticado.

El frontend se autentica contra Supabase y envía el access token como
``Authorization: Bearer <jwt>``. El backend solo valida la firma HS256 con
SUPABASE_JWT_SECRET y extrae ``sub`` como user_id (UUID en texto).

Autor: LoanIntake
Fecha: 2026-09-29
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.shared.config import get_settings

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def decode_supabase_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un access token de Supabase.

    Raises:
        HTTPException 401: token inválido, expirado o sin ``sub``
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            audience=settings.supabase_jwt_audience,
        )
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
        )
    except JWTError as e:
        logger.info("invalid_access_token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    if not claims.get("sub"):
        logger.warning("Auth token missing sub claim")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing subject in token",
        )
    return claims


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    """Dependencia FastAPI: user_id (``sub``) del bearer token."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = decode_supabase_token(credentials.credentials)
    return str(claims["sub"])


__all__ = ["decode_supabase_token", "get_current_user_id"]

# Fin del archivo backend/app/shared/auth_context.py
