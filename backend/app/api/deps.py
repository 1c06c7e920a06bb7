import logging
import os
from typing import Dict, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.repositories.cart_repo import CartRepository
from app.repositories.chat_repo import ChatHistoryStore
from app.repositories.document_repo import DocumentRepository
from app.repositories.json_store import JsonFileStore
from app.repositories.product_repo import ProductRepository
from app.services.auth_service import AuthService, InvalidToken, TokenService
from app.services.authorization import AuthorizationGate, Reject, admin_gate, member_gate
from app.services.cart_service import CartService
from app.services.chat_service import ChatRelay
from app.services.document_service import DocumentService
from app.services.product_service import ProductService

log = logging.getLogger(__name__)

PRODUCTS_FILE = "products.json"
CART_FILE = "cart.json"
DOCUMENTS_FILE = "documents.json"

_chat_relay = ChatRelay(ChatHistoryStore(limit=settings.CHAT_HISTORY_LIMIT))


def _store(file_name: str) -> JsonFileStore:
    return JsonFileStore(os.path.join(settings.DATA_DIR, file_name))


def get_product_repo() -> ProductRepository:
    return ProductRepository(_store(PRODUCTS_FILE))


def get_cart_repo() -> CartRepository:
    return CartRepository(_store(CART_FILE))


def get_document_repo() -> DocumentRepository:
    return DocumentRepository(_store(DOCUMENTS_FILE))


def get_product_service(repo: ProductRepository = Depends(get_product_repo)) -> ProductService:
    return ProductService(repo)


def get_cart_service(
    cart_repo: CartRepository = Depends(get_cart_repo),
    product_repo: ProductRepository = Depends(get_product_repo),
) -> CartService:
    return CartService(cart_repo, product_repo)


def get_document_service(repo: DocumentRepository = Depends(get_document_repo)) -> DocumentService:
    return DocumentService(repo, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)


def get_token_service() -> TokenService:
    return TokenService(settings.JWT_SECRET, settings.JWT_ALGORITHM, settings.JWT_EXPIRES_MINUTES)


def get_auth_service(
    db: Session = Depends(get_db), tokens: TokenService = Depends(get_token_service)
) -> AuthService:
    return AuthService(db, tokens, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_chat_relay() -> ChatRelay:
    return _chat_relay


def parse_id(raw: str, label: str = "ID") -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label}. Must be a number.",
        )


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def claims_from_token(token: Optional[str], tokens: TokenService) -> Dict:
    """Verify a raw bearer token; raises InvalidToken."""
    if not token:
        raise InvalidToken("Your token is empty")
    return tokens.decode(token)


def get_claims(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Dict:
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Authorization header missing or malformed")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise _unauthorized("Your token is empty")
    try:
        return claims_from_token(token, tokens)
    except InvalidToken as e:
        log.info("Bearer token rejected reason=%s", e)
        raise _unauthorized("Invalid or expired token")


def require(gate: AuthorizationGate):
    """Adapt an AuthorizationGate decision into a FastAPI dependency (403 on reject)."""

    def _dependency(claims: Dict = Depends(get_claims)) -> Dict:
        decision = gate(claims)
        if isinstance(decision, Reject):
            log.info("Request forbidden user_id=%s gate=%s", claims.get("userId"), gate)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=decision.kind)
        return claims

    return _dependency


require_member = require(member_gate)
require_admin = require(admin_gate)
