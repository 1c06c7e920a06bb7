import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user_schema import MIN_PASSWORD_LENGTH

log = logging.getLogger(__name__)

DEFAULT_ROLES = ["user"]


class AuthException(Exception):
    pass


class EmailAlreadyExists(AuthException):
    pass


class WeakPassword(AuthException):
    pass


class InvalidCredentials(AuthException):
    pass


class InvalidToken(AuthException):
    pass


def _pw_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_pw_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pw_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        return False


class TokenService:
    """Issues and verifies the HS256 bearer tokens carrying role claims."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, user_id, email: str, roles: List[str]) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "roles": list(roles),
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise InvalidToken(str(e)) from e


class AuthService:
    def __init__(self, db: Session, tokens: TokenService, bcrypt_rounds: int = 12):
        self.db = db
        self.users = UserRepository(db)
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, email: str, password: str) -> User:
        if self.users.get_by_email(email):
            raise EmailAlreadyExists("Email already exists")
        if len(password.strip()) < MIN_PASSWORD_LENGTH:
            raise WeakPassword(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return self.create_user(email, password, DEFAULT_ROLES)

    def create_user(self, email: str, password: str, roles: List[str]) -> User:
        try:
            user = self.users.create(email, hash_password(password, self.bcrypt_rounds), roles)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise EmailAlreadyExists("Email already exists")
        log.info("User created id=%s roles=%s", user.id, user.roles)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user: Optional[User] = self.users.get_by_email(email)
        if user is None or not check_password(password, user.password):
            log.info("Login rejected email=%s", email)
            raise InvalidCredentials("Invalid email or password")
        return user

    def login(self, email: str, password: str) -> Dict:
        user = self.authenticate(email, password)
        token = self.tokens.issue(user.id, user.email, user.roles)
        log.info("User logged in id=%s", user.id)
        return {"token": token, "user": {"id": user.id, "email": user.email, "roles": list(user.roles)}}
