import logging
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from app.api.deps import claims_from_token, get_chat_relay, get_token_service
from app.services.auth_service import InvalidToken, TokenService
from app.services.authorization import Reject, member_gate
from app.services.chat_service import ChatRelay

log = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.websocket("/ws")
async def chat_socket(
    ws: WebSocket,
    token: Optional[str] = None,
    tokens: TokenService = Depends(get_token_service),
    relay: ChatRelay = Depends(get_chat_relay),
):
    try:
        claims = claims_from_token(token, tokens)
    except InvalidToken as e:
        log.info("Chat handshake rejected reason=%s", e)
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    if isinstance(member_gate(claims), Reject):
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await relay.connect(ws, claims)
    try:
        while True:
            data = await ws.receive_json()
            await relay.handle(ws, claims, data)
    except WebSocketDisconnect:
        pass
    finally:
        relay.disconnect(ws, claims)
