"""
Storefront checkout.

Validates the customer form, writes the online order and its items, and
empties the cart once both writes succeeded.
"""
import re
from typing import Optional

from pydantic import BaseModel

from core.cart import CartService
from core.errors import (
    ERROR_INVALID_EMAIL,
    ERROR_INVALID_PHONE,
    ERROR_ONLINE_ORDERS_DISABLED,
    ERROR_ORDER_FAILED,
    ERROR_REQUIRED_FIELDS,
    EmptyCartError,
    ValidationError,
)
from core.logging import get_logger, sanitize_id_for_logging
from core.notifications import Notifier
from core.services.app_settings import AppSettings
from core.services.domains import OnlineOrdersDomain
from core.services.models import OnlineOrder
from core.services.money import to_float
from core.services.result import Result

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\-\+\(\)]{10,}$")

REQUIRED_FIELDS = ("name", "email", "phone", "address")


class CheckoutForm(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    notes: Optional[str] = None


def validate_checkout_form(form: CheckoutForm) -> None:
    """
    Raises:
        ValidationError: blank required field, bad e-mail or bad phone
    """
    if any(not getattr(form, name).strip() for name in REQUIRED_FIELDS):
        raise ValidationError(ERROR_REQUIRED_FIELDS)
    if not EMAIL_RE.match(form.email.strip()):
        raise ValidationError(ERROR_INVALID_EMAIL)
    if not PHONE_RE.match(re.sub(r"\s", "", form.phone)):
        raise ValidationError(ERROR_INVALID_PHONE)


async def place_order(
    form: CheckoutForm,
    cart: CartService,
    orders: OnlineOrdersDomain,
    settings: AppSettings,
    notifier: Notifier,
) -> Result[OnlineOrder]:
    """
    Turn the visitor's cart into a pending online order.

    Raises:
        ValidationError: orders disabled, invalid form or empty cart
    """
    if not settings.online_orders_enabled:
        raise ValidationError(ERROR_ONLINE_ORDERS_DISABLED)
    validate_checkout_form(form)
    if cart.cart.is_empty:
        raise EmptyCartError()

    state = cart.cart
    created = await orders.create({
        "customer_name": form.name.strip(),
        "customer_email": form.email.strip(),
        "customer_phone": form.phone.strip(),
        "customer_address": form.address.strip(),
        "notes": form.notes or "",
        "total": to_float(state.total),
    })
    if not created.success:
        notifier.error(ERROR_ORDER_FAILED)
        return Result.fail(created.error or ERROR_ORDER_FAILED)

    order = created.data
    items = await orders.add_items([
        {
            "order_id": order.id,
            "product_id": item.id,
            "quantity": item.quantity,
            "price": to_float(item.price),
        }
        for item in state.items
    ])
    if not items.success:
        # The order row exists without lines; the admin sees it with no items
        logger.error(f"Order {sanitize_id_for_logging(order.id)} stored without items")
        notifier.error(ERROR_ORDER_FAILED)
        return Result.fail(items.error or ERROR_ORDER_FAILED)

    await cart.clear_cart()
    notifier.success("¡Pedido enviado correctamente!")
    logger.info(f"Online order {sanitize_id_for_logging(order.id)} placed, {len(state.items)} lines")
    return Result.ok(order)
