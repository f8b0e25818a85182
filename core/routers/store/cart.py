"""
Storefront Cart Router

Every response carries the cart, its session id and the toasts raised
while handling the request.
"""
from fastapi import APIRouter, Depends, HTTPException

from core.cart import CartService
from core.errors import ERROR_PRODUCT_NOT_FOUND, OutOfStockError, ValidationError
from core.notifications import Notifier
from core.routers.deps import get_cart_service, get_context, get_notifier, parse_id
from core.routers.serializers import cart_response
from .models import AddToCartRequest, UpdateCartItemRequest

router = APIRouter(tags=["store-cart"])


@router.get("/cart")
async def get_cart(
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    return cart_response(cart, notifier)


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    ctx=Depends(get_context),
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    """Add one unit; stock and price are checked against the live product row."""
    product = await ctx.db.products.get(request.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    try:
        await cart.add_to_cart(product)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return cart_response(cart, notifier)


@router.patch("/cart/items/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    ctx=Depends(get_context),
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    """Set a line's quantity; zero or less removes it."""
    item_id = parse_id(product_id)

    if request.quantity > 0 and cart.is_in_cart(item_id):
        product = await ctx.db.products.get(item_id)
        if product is not None and request.quantity > product.stock:
            raise HTTPException(
                status_code=400,
                detail=str(OutOfStockError(product.name, product.stock)),
            )

    await cart.update_quantity(item_id, request.quantity)
    return cart_response(cart, notifier)


@router.delete("/cart/items/{product_id}")
async def remove_from_cart(
    product_id: str,
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    await cart.remove_from_cart(parse_id(product_id))
    return cart_response(cart, notifier)


@router.delete("/cart")
async def clear_cart(
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    await cart.clear_cart()
    return cart_response(cart, notifier)
