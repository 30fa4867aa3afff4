# -*- coding: utf-8 -*-
"""
backend/tests/shared/test_auth_context.py

Validación del access token de Supabase (HS256) y extracción de ``sub``.
"""
import time

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.shared.auth_context import decode_supabase_token, get_current_user_id
from app.shared.config import get_settings
from tests.conftest import USER_ID


def _token(secret=None, **overrides) -> str:
    now = int(time.time())
    claims = {"sub": USER_ID, "aud": "authenticated", "iat": now, "exp": now + 3600, "role": "authenticated"}
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    secret = secret or get_settings().supabase_jwt_secret.get_secret_value()
    return jwt.encode(claims, secret, algorithm="HS256")


class TestDecodeSupabaseToken:
    def test_valid_token(self):
        claims = decode_supabase_token(_token())
        assert claims["sub"] == USER_ID

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_token(_token(exp=int(time.time()) - 60))
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_wrong_audience(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_token(_token(aud="anon"))
        assert exc_info.value.detail == "Invalid token"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_token(_token(secret="another-secret-of-at-least-32-chars!!"))
        assert exc_info.value.status_code == 401

    def test_missing_sub(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_token(_token(sub=None))
        assert exc_info.value.detail == "Missing subject in token"


class TestGetCurrentUserId:
    @pytest.mark.asyncio
    async def test_bearer_token(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=_token())
        assert await get_current_user_id(credentials) == USER_ID

    @pytest.mark.asyncio
    async def test_missing_header(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(None)
        assert exc_info.value.status_code == 401
