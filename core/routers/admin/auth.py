"""
Admin Auth Router

Supabase Auth session endpoints for the admin panel login page.
"""
from fastapi import APIRouter, Depends

from core.auth import Credentials, sign_in, sign_up, verify_admin
from core.routers.deps import get_context

router = APIRouter(tags=["admin-auth"])


@router.post("/auth/sign-in")
async def admin_sign_in(credentials: Credentials, ctx=Depends(get_context)):
    return await sign_in(ctx.db.client, credentials)


@router.post("/auth/sign-up")
async def admin_sign_up(credentials: Credentials, ctx=Depends(get_context)):
    return await sign_up(ctx.db.client, credentials)


@router.get("/auth/me")
async def admin_me(user=Depends(verify_admin)):
    return {"id": getattr(user, "id", None), "email": getattr(user, "email", None)}
