from typing import Dict, List, Optional

from app.repositories.json_store import JsonFileStore


class CartRepository:
    def __init__(self, store: JsonFileStore):
        self.store = store

    def list(self) -> List[Dict]:
        return self.store.records_or_default()

    def load(self) -> List[Dict]:
        return self.store.load_records()

    def get(self, item_id: int) -> Optional[Dict]:
        return next((it for it in self.list() if it.get("id") == item_id), None)

    def find_by_product(self, items: List[Dict], product_id: int) -> Optional[Dict]:
        return next((it for it in items if it.get("productId") == product_id), None)

    def save_all(self, items: List[Dict]) -> None:
        self.store.save(items)

    def clear(self) -> None:
        self.store.save([])
