import logging
from datetime import datetime, timezone
from typing import Dict

from app.repositories.cart_repo import CartRepository
from app.repositories.json_store import DataUnavailable
from app.repositories.product_repo import ProductRepository
from app.schemas.cart_schema import MAX_QUANTITY, CartItemIn
from app.services.cart_pricing import empty_summary, generate_id, get_cart_with_details
from app.services.product_service import ProductNotFound

log = logging.getLogger(__name__)


class CartItemNotFound(Exception):
    pass


class QuantityLimitExceeded(Exception):
    pass


class CartService:
    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    def get_summary(self) -> Dict:
        """
        Cart summary priced against the current catalog.

        An unreadable cart or catalog file yields the empty summary rather
        than an error.
        """
        try:
            items = self.cart_repo.load()
            products = self.product_repo.load()
        except DataUnavailable as e:
            log.warning("Cart data unavailable, returning empty summary reason=%s", e)
            return empty_summary()
        return get_cart_with_details(items, products)

    def add_item(self, payload: CartItemIn) -> Dict:
        if self.product_repo.get(payload.product_id) is None:
            raise ProductNotFound("Product not found")

        items = self.cart_repo.list()
        item = self.cart_repo.find_by_product(items, payload.product_id)
        if item:
            quantity = item.get("quantity", 0) + payload.quantity
            if quantity > MAX_QUANTITY:
                raise QuantityLimitExceeded(f"Quantity cannot exceed {MAX_QUANTITY}")
            item["quantity"] = quantity
            item["updatedAt"] = datetime.now(timezone.utc).isoformat()
        else:
            item = {
                "id": generate_id(items),
                "productId": payload.product_id,
                "quantity": payload.quantity,
                "addedAt": datetime.now(timezone.utc).isoformat(),
            }
            items.append(item)
        self.cart_repo.save_all(items)
        log.info("Cart item saved id=%s product_id=%s quantity=%s", item["id"], item["productId"], item["quantity"])
        return item

    def update_item(self, item_id: int, quantity: int) -> Dict:
        items = self.cart_repo.list()
        item = next((it for it in items if it.get("id") == item_id), None)
        if item is None:
            raise CartItemNotFound("Cart item not found")
        item["quantity"] = quantity
        item["updatedAt"] = datetime.now(timezone.utc).isoformat()
        self.cart_repo.save_all(items)
        log.info("Cart item updated id=%s quantity=%s", item_id, quantity)
        return item

    def remove_item(self, item_id: int) -> Dict:
        items = self.cart_repo.list()
        idx = next((i for i, it in enumerate(items) if it.get("id") == item_id), None)
        if idx is None:
            raise CartItemNotFound("Cart item not found")
        removed = items.pop(idx)
        self.cart_repo.save_all(items)
        log.info("Cart item removed id=%s", item_id)
        return removed

    def clear(self) -> None:
        self.cart_repo.clear()
        log.info("Cart cleared")
