import logging
import time
from datetime import datetime, timezone
from typing import Dict, Set

from fastapi import WebSocket

from app.repositories.chat_repo import ChatHistoryStore

log = logging.getLogger(__name__)


class ChatRelay:
    """
    Relays chat messages between connected websockets.

    History lives in the injected store; the relay itself only tracks the
    currently open connections of this process.
    """

    def __init__(self, history: ChatHistoryStore):
        self.history = history
        self.connections: Set[WebSocket] = set()

    async def connect(self, ws: WebSocket, claims: Dict) -> None:
        await ws.accept()
        self.connections.add(ws)
        log.info("Chat connected email=%s", claims.get("email"))

    def disconnect(self, ws: WebSocket, claims: Dict) -> None:
        self.connections.discard(ws)
        log.info("Chat disconnected email=%s", claims.get("email"))

    def build_message(self, content: str, claims: Dict) -> Dict:
        return {
            "id": int(time.time() * 1000),
            "content": content,
            "username": claims.get("email"),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "userId": claims.get("userId"),
        }

    async def handle(self, ws: WebSocket, claims: Dict, data: Dict) -> None:
        kind = data.get("type") if isinstance(data, dict) else None
        if kind == "request history":
            await ws.send_json({"type": "chat history", "messages": self.history.load()})
        elif kind == "chat message":
            content = data.get("content")
            if not isinstance(content, str) or not content.strip():
                await ws.send_json({"type": "error", "error": "Message content is required"})
                return
            message = self.build_message(content, claims)
            self.history.append(message)
            await self.broadcast({"type": "chat message", "message": message})
        else:
            await ws.send_json({"type": "error", "error": "Unknown event type"})

    async def broadcast(self, event: Dict) -> None:
        for conn in list(self.connections):
            try:
                await conn.send_json(event)
            except Exception:
                log.warning("Dropping chat connection after failed send", exc_info=True)
                self.connections.discard(conn)
