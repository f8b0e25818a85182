"""Database Models - Pydantic models for all entities."""
from decimal import Decimal
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from core.services.money import to_decimal as _to_decimal

ProductId = Union[int, str]

ORDER_STATUSES = ("pending", "approved", "rejected")
# Rows created by the first storefront release used the Spanish status
PENDING_STATUSES = ("pending", "nuevo")

LOW_STOCK_THRESHOLD = 10


class Product(BaseModel):
    """Product model."""
    model_config = ConfigDict(extra="ignore")

    id: ProductId
    code: str
    name: str
    price: Decimal
    stock: int = 0
    category: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        return v or ""

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock < LOW_STOCK_THRESHOLD


class SaleLine(BaseModel):
    """Line snapshot stored in `sales.items` (JSON column)."""
    model_config = ConfigDict(extra="ignore")

    code: Optional[str] = None
    name: str
    price: Decimal
    quantity: int

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Sale(BaseModel):
    """Point-of-sale ticket."""
    model_config = ConfigDict(extra="ignore")

    id: ProductId
    total: Decimal
    items: list[SaleLine] = []
    created_at: Optional[datetime] = None

    @field_validator("total", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, v):
        return v or []


class OrderItem(BaseModel):
    """Order line; `product_name`/`product_code` are filled from the products join."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[ProductId] = None
    order_id: ProductId
    product_id: ProductId
    quantity: int
    price: Decimal
    product_name: Optional[str] = None
    product_code: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "OrderItem":
        joined = row.get("products") or {}
        return cls(
            **row,
            product_name=joined.get("name"),
            product_code=joined.get("code"),
        )


class OnlineOrder(BaseModel):
    """Order placed from the public storefront."""
    model_config = ConfigDict(extra="ignore")

    id: ProductId
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    notes: Optional[str] = None
    total: Decimal
    status: str = "pending"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: list[OrderItem] = []

    @field_validator("total", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def is_pending(self) -> bool:
        return self.status in PENDING_STATUSES
