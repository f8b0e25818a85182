"""
Shared Dependencies for Routers

Everything a handler needs comes out of the AppContext stored on the app
at startup; a fresh Notifier and CartService are built per request.
"""

import re
import uuid
from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request

from core.cart import CartService
from core.notifications import Notifier

if TYPE_CHECKING:
    from core.context import AppContext

_SESSION_RE = re.compile(r"^[A-Za-z0-9_-]{8,64}$")


def get_context(request: Request) -> "AppContext":
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return ctx


def get_notifier() -> Notifier:
    return Notifier()


def get_cart_session(x_cart_session: str = Header(None, alias="X-Cart-Session")) -> str:
    """Visitor's cart session; a new one is issued when the header is absent."""
    if x_cart_session is None:
        return uuid.uuid4().hex
    if not _SESSION_RE.match(x_cart_session):
        raise HTTPException(status_code=400, detail="Invalid cart session")
    return x_cart_session


async def get_cart_service(
    session_id: str = Depends(get_cart_session),
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
) -> CartService:
    service = CartService(ctx.cart_store, notifier, session_id=session_id)
    await service.initialize()
    return service


def parse_id(value: str):
    """Path ids arrive as text; numeric ids are stored as integers."""
    return int(value) if value.isdigit() else value


def require_ok(result):
    """Unwrap a domain Result, turning a failed backend call into a 502."""
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error or "Backend error")
    return result.data
