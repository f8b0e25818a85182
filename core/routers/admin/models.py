"""
Admin API Pydantic Models

Shared models for all admin endpoints.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, Field


# ==================== PRODUCT MODELS ====================

class CreateProductRequest(BaseModel):
    code: str
    name: str
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    category: str = ""
    description: Optional[str] = None


class UpdateProductRequest(BaseModel):
    code: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    description: Optional[str] = None


# ==================== SALE MODELS ====================

class SaleLineRequest(BaseModel):
    code: str
    quantity: int = 1


class CreateSaleRequest(BaseModel):
    items: List[SaleLineRequest]


# ==================== ORDER MODELS ====================

class UpdateOrderStatusRequest(BaseModel):
    status: str


class RejectOrderRequest(BaseModel):
    reason: str = ""


# ==================== SETTINGS MODELS ====================

class UpdateSettingRequest(BaseModel):
    value: Any


class UpdateSettingsRequest(BaseModel):
    values: dict[str, Any]
