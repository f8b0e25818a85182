"""
Storefront Checkout Router

Turns the visitor's cart into a pending online order and mails the admin.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.cart import CartService
from core.logging import get_logger
from core.notifications import Notifier
from core.routers.deps import get_cart_service, get_context, get_notifier
from core.routers.serializers import order_to_dict
from core.services.checkout import CheckoutForm, place_order
from core.services.order_emails import OrderMailer

logger = get_logger(__name__)

router = APIRouter(tags=["store-checkout"])


@router.post("/checkout")
async def checkout(
    form: CheckoutForm,
    ctx=Depends(get_context),
    cart: CartService = Depends(get_cart_service),
    notifier: Notifier = Depends(get_notifier),
):
    settings = ctx.db.settings.settings
    lines = cart.cart.items

    result = await place_order(form, cart, ctx.db.orders, settings, notifier)
    if not result.success:
        return JSONResponse(
            status_code=502,
            content={"success": False, "error": result.error, "notifications": notifier.drain()},
        )

    order = result.data
    mail = await OrderMailer(ctx.db.client, settings).notify_admin_new_order(order, lines)
    if not mail.success:
        logger.warning(f"New order mail not sent: {mail.error}")

    return {
        "success": True,
        "order": order_to_dict(order),
        "session_id": cart.session_id,
        "notifications": notifier.drain(),
    }
