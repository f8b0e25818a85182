"""
Authentication

Admin panel access goes through Supabase Auth. The browser signs in, keeps
the access token, and sends it back as `Authorization: Bearer <token>`.
Storefront endpoints are public.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from core.errors import ERROR_UNAUTHORIZED
from core.logging import get_logger
from core.routers.deps import get_context

logger = get_logger(__name__)


class Credentials(BaseModel):
    email: str
    password: str


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return None


def _session_payload(response: Any) -> dict:
    session = getattr(response, "session", None)
    user = getattr(response, "user", None)
    return {
        "access_token": getattr(session, "access_token", None),
        "refresh_token": getattr(session, "refresh_token", None),
        "expires_at": getattr(session, "expires_at", None),
        "user": {"id": getattr(user, "id", None), "email": getattr(user, "email", None)} if user else None,
    }


async def sign_in(client, credentials: Credentials) -> dict:
    """Password sign-in; raises HTTPException(401) on rejection."""
    try:
        response = await client.auth.sign_in_with_password(
            {"email": credentials.email, "password": credentials.password}
        )
    except Exception as e:
        logger.warning(f"Sign-in rejected: {e}")
        raise HTTPException(status_code=401, detail="Credenciales inválidas")
    return _session_payload(response)


async def sign_up(client, credentials: Credentials) -> dict:
    try:
        response = await client.auth.sign_up(
            {"email": credentials.email, "password": credentials.password}
        )
    except Exception as e:
        logger.warning(f"Sign-up rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return _session_payload(response)


async def verify_admin(
    authorization: str = Header(None, alias="Authorization"),
    ctx=Depends(get_context),
):
    """
    Resolve the Supabase user behind the bearer token.

    Returns the Supabase user object; 401 when missing or invalid.
    """
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="No authorization header")

    try:
        response = await ctx.db.client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Session check failed: {e}")
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    return user
