# backend/app/schemas/product_schema.py
from typing import Any, Mapping, Optional
from pydantic import BaseModel, ConfigDict

from app.services.cart_pricing import coerce_price


class ProductIn(BaseModel):
    """A product payload that already passed ``validate_product``."""
    name: str
    price: float

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ProductIn":
        return cls(name=payload["name"].strip(), price=coerce_price(payload["price"]))


class ProductOut(BaseModel):
    model_config = ConfigDict(extra="allow")
    id: int
    name: str
    price: float
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
