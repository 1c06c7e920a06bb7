"""
Cart pricing and payload validation.

Every function here is pure: data comes in as parameters (lists of plain
dicts as stored in the JSON files) and nothing is read from or written to a
store. Callers load a snapshot, compute, and persist the result themselves.
"""
import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

NAME_REQUIRED = "Name is required and must be a non-empty string"
NAME_TOO_LONG = "Product name cannot exceed 100 characters"
PRICE_REQUIRED = "Price is required and must be a positive number"

MAX_NAME_LENGTH = 100


def _field(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def coerce_price(value: Any) -> Optional[float]:
    """
    Return ``value`` as a finite positive float, or None if it is not one.

    Numeric strings such as ``"19.99"`` are accepted; booleans, non-numeric
    strings, zero, negatives, NaN and infinities are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        value = float(value)
    else:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def validate_product(candidate: Any) -> List[str]:
    """Collect every validation error for a product payload (empty list when valid)."""
    errors = []
    name = _field(candidate, "name") if candidate is not None else None
    if not isinstance(name, str) or not name.strip():
        errors.append(NAME_REQUIRED)
    elif len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(NAME_TOO_LONG)

    price = _field(candidate, "price") if candidate is not None else None
    if coerce_price(price) is None:
        errors.append(PRICE_REQUIRED)
    return errors


def _find_product(products: Sequence[Mapping], product_id: Any) -> Optional[Mapping]:
    # first match wins; duplicated ids are not defended against
    return next((p for p in products if p.get("id") == product_id), None)


def _subtotal(product: Optional[Mapping], item: Mapping) -> float:
    if product is None:
        return 0
    return product["price"] * item.get("quantity", 0)


def calculate_balance(cart_items: Sequence[Mapping], products: Sequence[Mapping]) -> float:
    total = 0
    for item in cart_items or ():
        total += _subtotal(_find_product(products or (), item.get("productId")), item)
    return total


def empty_summary() -> Dict[str, Any]:
    return {"items": [], "balance": 0, "itemCount": 0}


def get_cart_with_details(
    cart_items: Sequence[Mapping], products: Sequence[Mapping]
) -> Dict[str, Any]:
    """
    Build the cart summary ``{items, balance, itemCount}``.

    Lines whose product no longer exists get ``product: None`` and a zero
    subtotal. They still count towards ``itemCount``; ``balance`` only covers
    resolvable lines.
    """
    cart_items = cart_items or []
    products = products or []
    if not cart_items:
        return empty_summary()

    items = []
    for item in cart_items:
        product = _find_product(products, item.get("productId"))
        items.append(
            {
                **item,
                "product": dict(product) if product is not None else None,
                "subtotal": _subtotal(product, item),
            }
        )

    return {
        "items": items,
        "balance": calculate_balance(cart_items, products),
        "itemCount": sum(item.get("quantity", 0) for item in cart_items),
    }


def generate_id(existing_items: Optional[Sequence[Mapping]]) -> int:
    """
    Next id as ``max(existing ids) + 1``, or 1 for an empty or missing list.

    Anything that is not a list/tuple (None, a string, a dict) falls back to 1.
    The watermark is only safe with a single writer per store.
    """
    if not isinstance(existing_items, (list, tuple)):
        return 1
    ids = [
        item.get("id")
        for item in existing_items
        if isinstance(item, Mapping)
        and isinstance(item.get("id"), int)
        and not isinstance(item.get("id"), bool)
    ]
    if not ids:
        return 1
    return max(ids) + 1
