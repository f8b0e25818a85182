"""
Store settings.

`app_settings` holds plain key/value text rows edited from the admin panel.
They are folded into a typed AppSettings at load time; unknown keys are
ignored and missing keys fall back to the defaults below.
"""
from decimal import Decimal
from typing import Any, Iterable, Literal

from pydantic import BaseModel, field_validator

from core.services.money import to_decimal

ThemeMode = Literal["light", "dark", "auto"]

# row key -> AppSettings field
SETTING_KEYS: dict[str, str] = {
    "theme_mode": "theme_mode",
    "theme_primary_color": "primary_color",
    "theme_secondary_color": "secondary_color",
    "admin_email": "admin_email",
    "admin_phone": "admin_phone",
    "business_address": "business_address",
    "business_hours": "business_hours",
    "business_name": "business_name",
    "currency_symbol": "currency_symbol",
    "tax_rate": "tax_rate",
    "order_confirmation_message": "confirmation_message",
    "email_notifications": "email_notifications",
    "enable_online_orders": "online_orders_enabled",
}


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class AppSettings(BaseModel):
    theme_mode: ThemeMode = "light"
    primary_color: str = "#3b82f6"
    secondary_color: str = "#64748b"

    admin_email: str = ""
    admin_phone: str = ""
    business_address: str = ""
    business_hours: str = ""

    business_name: str = "Mi Negocio"
    currency_symbol: str = "$"
    tax_rate: Decimal = Decimal("0")
    confirmation_message: str = "Gracias por tu pedido. Te contactaremos pronto."

    email_notifications: bool = True
    online_orders_enabled: bool = True

    @field_validator("theme_mode", mode="before")
    @classmethod
    def normalize_theme(cls, v):
        return v if v in ("light", "dark", "auto") else "light"

    @field_validator("tax_rate", mode="before")
    @classmethod
    def convert_tax_rate(cls, v):
        return to_decimal(v)

    @field_validator("email_notifications", "online_orders_enabled", mode="before")
    @classmethod
    def convert_flag(cls, v):
        return _flag(v)

    @classmethod
    def from_rows(cls, rows: Iterable[dict[str, Any]]) -> "AppSettings":
        values: dict[str, Any] = {}
        for row in rows:
            field_name = SETTING_KEYS.get(row.get("key", ""))
            value = row.get("value")
            # Blank values behave like missing ones
            if field_name and value not in (None, ""):
                values[field_name] = value
        return cls(**values)

    def with_value(self, key: str, value: Any) -> "AppSettings":
        """Copy with one row key changed, validated like a fresh load."""
        field_name = SETTING_KEYS.get(key)
        if field_name is None:
            return self
        data = self.model_dump()
        data[field_name] = value
        return type(self).model_validate(data)

    def theme(self) -> dict:
        return {
            "mode": self.theme_mode,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
        }

    def contact(self) -> dict:
        return {
            "email": self.admin_email,
            "phone": self.admin_phone,
            "address": self.business_address,
            "hours": self.business_hours,
        }

    def business(self) -> dict:
        return {
            "name": self.business_name,
            "currency": self.currency_symbol,
            "tax_rate": float(self.tax_rate),
            "confirmation_message": self.confirmation_message,
        }

    def notification(self) -> dict:
        return {
            "email_enabled": self.email_notifications,
            "online_orders_enabled": self.online_orders_enabled,
        }
