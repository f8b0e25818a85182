"""
Order e-mails.

Sent through the `send-email` Supabase Edge Function. Mail is best effort:
failures are logged and reported as a failed Result, never raised.
"""
import html
from typing import Any, Iterable

from core.logging import get_logger, sanitize_id_for_logging
from core.services.app_settings import AppSettings
from core.services.money import format_money
from core.services.result import Result

logger = get_logger(__name__)

EMAIL_FUNCTION = "send-email"


def _lines_text(items: Iterable[Any], symbol: str) -> str:
    return "\n".join(
        f"- {item.name} x{item.quantity} = {format_money(item.price * item.quantity, symbol)}"
        for item in items
    )


class OrderMailer:
    def __init__(self, client, settings: AppSettings):
        self.client = client
        self.settings = settings

    async def send(self, to: str, subject: str, text: str) -> Result[Any]:
        body = {
            "to": to,
            "subject": subject,
            "text": text,
            "html": "<pre>" + html.escape(text) + "</pre>",
        }
        try:
            data = await self.client.functions.invoke(EMAIL_FUNCTION, invoke_options={"body": body})
        except Exception as e:
            logger.error(f"Failed to send e-mail: {e}", exc_info=True)
            return Result.fail(str(e))
        return Result.ok(data)

    async def notify_admin_new_order(self, order, items: Iterable[Any]) -> Result[Any]:
        if not self.settings.email_notifications:
            return Result.ok("Notifications disabled")
        if not self.settings.admin_email:
            logger.warning("Admin e-mail not configured; skipping new order mail")
            return Result.fail("Admin email not configured")

        symbol = self.settings.currency_symbol
        text = (
            f"Nuevo Pedido #{order.id}\n\n"
            f"Cliente: {order.customer_name}\n"
            f"Email: {order.customer_email}\n"
            f"Teléfono: {order.customer_phone or 'No proporcionado'}\n"
            f"Dirección: {order.customer_address or 'No proporcionada'}\n"
            f"Total: {format_money(order.total, symbol)}\n\n"
            f"Productos:\n{_lines_text(items, symbol)}\n"
        )
        if order.notes:
            text += f"\nNotas: {order.notes}\n"
        logger.info(f"Mailing admin about order {sanitize_id_for_logging(order.id)}")
        return await self.send(
            self.settings.admin_email,
            f"Nuevo Pedido #{order.id} - {order.customer_name}",
            text,
        )

    async def notify_customer_confirmed(self, order) -> Result[Any]:
        if not self.settings.email_notifications:
            return Result.ok("Notifications disabled")
        if not order.customer_email:
            return Result.fail("Customer email not provided")

        text = (
            f"Hola {order.customer_name},\n\n"
            f"Tu pedido #{order.id} ha sido confirmado.\n"
            f"Total: {format_money(order.total, self.settings.currency_symbol)}\n\n"
            f"{self.settings.confirmation_message}\n\n"
            f"{self.settings.business_name}\n"
            f"{self.settings.admin_phone}\n"
        )
        return await self.send(
            order.customer_email,
            f"Pedido Confirmado #{order.id} - {self.settings.business_name}",
            text,
        )

    async def notify_customer_cancelled(self, order, reason: str = "") -> Result[Any]:
        if not self.settings.email_notifications:
            return Result.ok("Notifications disabled")
        if not order.customer_email:
            return Result.fail("Customer email not provided")

        text = (
            f"Hola {order.customer_name},\n\n"
            f"Lamentamos informarte que tu pedido #{order.id} ha sido cancelado.\n"
        )
        if reason:
            text += f"Motivo: {reason}\n"
        text += f"\nSi tienes dudas, contáctanos: {self.settings.admin_email} {self.settings.admin_phone}\n"
        return await self.send(
            order.customer_email,
            f"Pedido Cancelado #{order.id} - {self.settings.business_name}",
            text,
        )
