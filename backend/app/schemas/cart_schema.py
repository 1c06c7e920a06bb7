from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

MIN_QUANTITY = 1
MAX_QUANTITY = 1000


class CartItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    product_id: int = Field(..., alias="productId", gt=0)
    quantity: int = Field(1, ge=MIN_QUANTITY, le=MAX_QUANTITY)


class CartUpdateIn(BaseModel):
    quantity: int = Field(..., ge=MIN_QUANTITY, le=MAX_QUANTITY)


# (field, pydantic error type) -> message shown to clients
MESSAGES: Dict[Tuple[str, str], str] = {
    ("productId", "missing"): "Product ID is required",
    ("productId", "int_parsing"): "Product ID must be a number",
    ("productId", "int_type"): "Product ID must be a number",
    ("productId", "int_from_float"): "Product ID must be an integer",
    ("productId", "greater_than"): "Product ID must be positive",
    ("quantity", "missing"): "Quantity is required",
    ("quantity", "int_parsing"): "Quantity must be a number",
    ("quantity", "int_type"): "Quantity must be a number",
    ("quantity", "int_from_float"): "Quantity must be an integer",
    ("quantity", "greater_than_equal"): "Quantity must be at least 1",
    ("quantity", "less_than_equal"): "Quantity cannot exceed 1000",
}

