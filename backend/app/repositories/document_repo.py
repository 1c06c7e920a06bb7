from typing import Dict, List, Optional

from app.repositories.json_store import JsonFileStore


class DocumentRepository:
    def __init__(self, store: JsonFileStore):
        self.store = store

    def list(self) -> List[Dict]:
        return self.store.records_or_default()

    def list_for_user(self, user_id) -> List[Dict]:
        return [d for d in self.list() if d.get("userId") == user_id]

    def get(self, document_id: int) -> Optional[Dict]:
        return next((d for d in self.list() if d.get("id") == document_id), None)

    def save_all(self, documents: List[Dict]) -> None:
        self.store.save(documents)
