"""
Admin API Router

Admin-only endpoints for inventory, sales, orders, reports, labels and settings.
Every sub-router except auth requires a Supabase session (see core.auth.verify_admin).
"""
from fastapi import APIRouter, Depends

from core.auth import verify_admin
from .auth import router as auth_router
from .products import router as products_router
from .sales import router as sales_router
from .orders import router as orders_router
from .reports import router as reports_router
from .labels import router as labels_router
from .settings import router as settings_router

# Create main router
router = APIRouter(tags=["admin"])

router.include_router(auth_router)

_protected = [Depends(verify_admin)]
router.include_router(products_router, dependencies=_protected)
router.include_router(sales_router, dependencies=_protected)
router.include_router(orders_router, dependencies=_protected)
router.include_router(reports_router, dependencies=_protected)
router.include_router(labels_router, dependencies=_protected)
router.include_router(settings_router, dependencies=_protected)

__all__ = ["router"]
