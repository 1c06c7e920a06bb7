from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create(self, email: str, password_hash: str, roles: List[str]) -> User:
        u = User(email=email, password=password_hash, roles=list(roles))
        self.db.add(u)
        self.db.flush()
        return u

    def list(self, limit: int = 100) -> List[User]:
        return self.db.query(User).order_by(User.id).limit(limit).all()
