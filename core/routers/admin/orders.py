"""
Admin Orders Router

Online order review: list, items, approve into a sale, reject.
The pending badge count is kept current by the realtime subscription.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from core.errors import ERROR_ORDER_NOT_FOUND
from core.logging import get_logger
from core.notifications import Notifier
from core.routers.deps import get_context, get_notifier, parse_id, require_ok
from core.routers.serializers import order_item_to_dict, order_to_dict
from core.services.order_emails import OrderMailer
from .models import RejectOrderRequest, UpdateOrderStatusRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-orders"])


@router.get("/orders")
async def admin_get_orders(status: Optional[str] = None, ctx=Depends(get_context)):
    domain = ctx.db.orders
    orders = require_ok(await domain.list(status))
    return {
        "orders": [order_to_dict(o) for o in orders],
        "pending_count": domain.pending_count,
    }


@router.get("/orders/pending-count")
async def admin_get_pending_count(refresh: bool = False, ctx=Depends(get_context)):
    domain = ctx.db.orders
    if refresh:
        await domain.fetch_pending_count()
    return {"pending_count": domain.pending_count}


@router.get("/orders/{order_id}/items")
async def admin_get_order_items(order_id: str, ctx=Depends(get_context)):
    items = require_ok(await ctx.db.orders.get_items(parse_id(order_id)))
    return {"items": [order_item_to_dict(i) for i in items]}


@router.post("/orders/{order_id}/approve")
async def admin_approve_order(
    order_id: str,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    """Convert the order into a sale (stock is decremented by the backend)."""
    domain = ctx.db.orders
    key = parse_id(order_id)

    result = await domain.approve(key)
    if not result.success:
        notifier.error("Error al aprobar el pedido")
        raise HTTPException(status_code=502, detail=result.error)

    order = domain.find(key)
    if order is not None:
        mail = await OrderMailer(ctx.db.client, ctx.db.settings.settings).notify_customer_confirmed(order)
        if not mail.success:
            logger.warning(f"Confirmation mail not sent: {mail.error}")

    notifier.success("Pedido aprobado y convertido en venta")
    return {
        "success": True,
        "data": result.data,
        "pending_count": domain.pending_count,
        "notifications": notifier.drain(),
    }


@router.post("/orders/{order_id}/reject")
async def admin_reject_order(
    order_id: str,
    request: Optional[RejectOrderRequest] = None,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    domain = ctx.db.orders
    result = await domain.reject(parse_id(order_id))
    if not result.success and result.error == ERROR_ORDER_NOT_FOUND:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    order = require_ok(result)

    reason = request.reason if request else ""
    mail = await OrderMailer(ctx.db.client, ctx.db.settings.settings).notify_customer_cancelled(order, reason)
    if not mail.success:
        logger.warning(f"Cancellation mail not sent: {mail.error}")

    notifier.success("Pedido rechazado")
    return {
        "success": True,
        "order": order_to_dict(order),
        "pending_count": domain.pending_count,
        "notifications": notifier.drain(),
    }


@router.patch("/orders/{order_id}/status")
async def admin_update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    domain = ctx.db.orders
    result = await domain.update_status(parse_id(order_id), request.status)
    if not result.success and result.error == ERROR_ORDER_NOT_FOUND:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    order = require_ok(result)
    notifier.success("Estado del pedido actualizado")
    return {
        "success": True,
        "order": order_to_dict(order),
        "pending_count": domain.pending_count,
        "notifications": notifier.drain(),
    }
