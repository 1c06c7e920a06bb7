from collections import deque
from typing import Dict, List


class ChatHistoryStore:
    """In-memory chat history that only keeps the most recent ``limit`` messages."""

    def __init__(self, limit: int = 50):
        self.limit = limit
        self._messages = deque(maxlen=limit)

    def load(self) -> List[Dict]:
        return list(self._messages)

    def append(self, message: Dict) -> None:
        self._messages.append(message)

    def clear(self) -> None:
        self._messages.clear()
