"""Storefront request models."""
from typing import Union

from pydantic import BaseModel


class AddToCartRequest(BaseModel):
    product_id: Union[int, str]


class UpdateCartItemRequest(BaseModel):
    quantity: int
