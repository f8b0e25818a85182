"""
Admin Products Router

Inventory management, scanner lookup and product images.
"""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from core.errors import ERROR_PRODUCT_CODE_REQUIRED, ERROR_PRODUCT_NOT_FOUND, ValidationError
from core.notifications import Notifier
from core.routers.deps import get_context, get_notifier, parse_id, require_ok
from core.routers.serializers import product_to_dict
from core.services.images import ProductImages
from core.services.money import parse_money, to_float
from .models import CreateProductRequest, UpdateProductRequest

router = APIRouter(tags=["admin-products"])


async def _get_product_or_404(ctx, product_id: str):
    product = await ctx.db.products.get(parse_id(product_id))
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product


# ==================== PRODUCTS ====================

@router.get("/products")
async def admin_get_products(search: str = "", ctx=Depends(get_context)):
    """Inventory list with low-stock flags."""
    domain = ctx.db.products
    require_ok(await domain.list())
    products = domain.search(search)
    return {
        "products": [product_to_dict(p) for p in products],
        "low_stock_count": len(domain.low_stock()),
    }


@router.get("/products/code/{code}")
async def admin_find_product_by_code(code: str, ctx=Depends(get_context)):
    """Scanner lookup used by the sales page."""
    product = await ctx.db.products.find_by_code(code)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return {"product": product_to_dict(product)}


@router.get("/products/{product_id}")
async def admin_get_product(product_id: str, ctx=Depends(get_context)):
    product = await _get_product_or_404(ctx, product_id)
    return {"product": product_to_dict(product)}


@router.post("/products")
async def admin_create_product(
    request: CreateProductRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    if not request.code.strip() or not request.name.strip():
        raise ValidationError(ERROR_PRODUCT_CODE_REQUIRED)

    data = request.model_dump()
    data["code"] = request.code.strip()
    data["name"] = request.name.strip()
    data["price"] = to_float(parse_money(request.price))

    product = require_ok(await ctx.db.products.create(data))
    notifier.success("Producto agregado correctamente")
    return {"success": True, "product": product_to_dict(product), "notifications": notifier.drain()}


@router.patch("/products/{product_id}")
async def admin_update_product(
    product_id: str,
    request: UpdateProductRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    data = request.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    if "price" in data:
        data["price"] = to_float(parse_money(data["price"]))

    result = await ctx.db.products.update(parse_id(product_id), data)
    if not result.success and result.error == ERROR_PRODUCT_NOT_FOUND:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    product = require_ok(result)
    notifier.success("Producto actualizado correctamente")
    return {"success": True, "product": product_to_dict(product), "notifications": notifier.drain()}


@router.delete("/products/{product_id}")
async def admin_delete_product(
    product_id: str,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    product = await _get_product_or_404(ctx, product_id)
    require_ok(await ctx.db.products.delete(product.id))
    if product.image_name:
        await ProductImages(ctx.db.client, ctx.db.products).delete_object(product.image_name)
    notifier.success("Producto eliminado correctamente")
    return {"success": True, "notifications": notifier.drain()}


# ==================== IMAGES ====================

@router.post("/products/{product_id}/image")
async def admin_upload_product_image(
    product_id: str,
    file: UploadFile = File(...),
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    product = await _get_product_or_404(ctx, product_id)
    content = await file.read()

    images = ProductImages(ctx.db.client, ctx.db.products)
    updated = require_ok(
        await images.upload(product, file.filename or "", content, file.content_type or "")
    )
    notifier.success("Imagen subida correctamente")
    return {"success": True, "product": product_to_dict(updated), "notifications": notifier.drain()}


@router.delete("/products/{product_id}/image")
async def admin_remove_product_image(
    product_id: str,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    product = await _get_product_or_404(ctx, product_id)
    updated = require_ok(await ProductImages(ctx.db.client, ctx.db.products).remove(product))
    notifier.success("Imagen eliminada")
    return {"success": True, "product": product_to_dict(updated), "notifications": notifier.drain()}
