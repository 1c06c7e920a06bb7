from typing import Dict, List, Optional

from app.repositories.json_store import JsonFileStore


class ProductRepository:
    def __init__(self, store: JsonFileStore):
        self.store = store

    def list(self) -> List[Dict]:
        return self.store.records_or_default()

    def load(self) -> List[Dict]:
        """Strict read; raises DataUnavailable instead of defaulting."""
        return self.store.load_records()

    def get(self, product_id: int) -> Optional[Dict]:
        return next((p for p in self.list() if p.get("id") == product_id), None)

    def save_all(self, products: List[Dict]) -> None:
        self.store.save(products)

    def clear(self) -> None:
        self.store.save([])
