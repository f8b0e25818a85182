"""
Response serializers.

Money leaves the API as floats rounded to cents; timestamps as ISO text.
"""
from core.cart import CartService
from core.notifications import Notifier
from core.services.app_settings import AppSettings
from core.services.models import OnlineOrder, OrderItem, Product, Sale
from core.services.money import round_money, to_float


def _money(value) -> float:
    return to_float(round_money(value))


def product_to_dict(product: Product) -> dict:
    data = product.model_dump(mode="json")
    data["price"] = _money(product.price)
    data["in_stock"] = product.in_stock
    data["is_low_stock"] = product.is_low_stock
    return data


def sale_to_dict(sale: Sale) -> dict:
    data = sale.model_dump(mode="json")
    data["total"] = _money(sale.total)
    data["items"] = [
        {**line.model_dump(mode="json"), "price": _money(line.price), "subtotal": _money(line.subtotal)}
        for line in sale.items
    ]
    return data


def order_item_to_dict(item: OrderItem) -> dict:
    data = item.model_dump(mode="json")
    data["price"] = _money(item.price)
    data["subtotal"] = _money(item.price * item.quantity)
    return data


def order_to_dict(order: OnlineOrder) -> dict:
    data = order.model_dump(mode="json")
    data["total"] = _money(order.total)
    data["items"] = [order_item_to_dict(item) for item in order.items]
    return data


def settings_to_dict(settings: AppSettings) -> dict:
    data = settings.model_dump(mode="json")
    data["tax_rate"] = float(settings.tax_rate)
    return data


def cart_response(service: CartService, notifier: Notifier) -> dict:
    state = service.cart
    return {
        "session_id": service.session_id,
        **state.to_dict(),
        "item_count": state.item_count,
        "notifications": notifier.drain(),
    }
