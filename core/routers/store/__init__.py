"""
Storefront API Router

Public endpoints for the online shop. Carts are keyed by the
`X-Cart-Session` header; the session id is echoed back in cart responses.
"""
from fastapi import APIRouter

from .products import router as products_router
from .cart import router as cart_router
from .checkout import router as checkout_router

router = APIRouter(tags=["store"])

router.include_router(products_router)
router.include_router(cart_router)
router.include_router(checkout_router)

__all__ = ["router"]
