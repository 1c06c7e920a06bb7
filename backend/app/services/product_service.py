import logging
from datetime import datetime, timezone
from typing import Dict, List

from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductIn
from app.services.cart_pricing import generate_id

log = logging.getLogger(__name__)


class ProductServiceException(Exception):
    pass


class ProductNotFound(ProductServiceException):
    pass


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProductService:
    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self) -> List[Dict]:
        return self.repo.list()

    def get_product(self, product_id: int) -> Dict:
        p = self.repo.get(product_id)
        if not p:
            raise ProductNotFound("Product not found")
        return p

    def create_product(self, payload: ProductIn) -> Dict:
        products = self.repo.list()
        product = {
            "id": generate_id(products),
            "name": payload.name,
            "price": payload.price,
            "createdAt": _now(),
        }
        products.append(product)
        self.repo.save_all(products)
        log.info("Product created id=%s name=%s price=%s", product["id"], product["name"], product["price"])
        return product

    def update_product(self, product_id: int, payload: ProductIn) -> Dict:
        products = self.repo.list()
        idx = next((i for i, p in enumerate(products) if p.get("id") == product_id), None)
        if idx is None:
            raise ProductNotFound("Product not found")
        products[idx] = {
            **products[idx],
            "name": payload.name,
            "price": payload.price,
            "updatedAt": _now(),
        }
        self.repo.save_all(products)
        log.info("Product updated id=%s", product_id)
        return products[idx]

    def delete_product(self, product_id: int) -> Dict:
        products = self.repo.list()
        idx = next((i for i, p in enumerate(products) if p.get("id") == product_id), None)
        if idx is None:
            raise ProductNotFound("Product not found")
        deleted = products.pop(idx)
        self.repo.save_all(products)
        log.info("Product deleted id=%s", product_id)
        return deleted

    def clear_products(self) -> None:
        self.repo.clear()
        log.info("Product catalog cleared")
