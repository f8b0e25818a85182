"""
Storefront Products Router

Catalog browsing and the public store settings.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from core.errors import ERROR_PRODUCT_NOT_FOUND
from core.routers.deps import get_context, parse_id, require_ok
from core.routers.serializers import product_to_dict

router = APIRouter(tags=["store-products"])


@router.get("/products")
async def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    ctx=Depends(get_context),
):
    """Catalog, optionally filtered by a search term and an exact category."""
    domain = ctx.db.products
    require_ok(await domain.list())

    products = domain.search(search) if search else list(domain.products)
    if category:
        products = [p for p in products if p.category.lower() == category.lower()]

    categories = sorted({p.category for p in domain.products if p.category})
    return {
        "products": [product_to_dict(p) for p in products],
        "categories": categories,
        "count": len(products),
    }


@router.get("/products/{product_id}")
async def get_product(product_id: str, ctx=Depends(get_context)):
    product = await ctx.db.products.get(parse_id(product_id))
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return {"product": product_to_dict(product)}


@router.get("/settings")
async def get_store_settings(ctx=Depends(get_context)):
    """Theme, contact and business details for the storefront header and footer."""
    settings = ctx.db.settings.settings
    return {
        "theme": settings.theme(),
        "contact": settings.contact(),
        "business": settings.business(),
        "online_orders_enabled": settings.online_orders_enabled,
    }
