from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from app.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password = Column(String(128), nullable=False)  # bcrypt hash
    roles = Column(JSON, nullable=False, default=lambda: ["user"])
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
