"""User model."""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID

from . import Base


class User(Base):
    """Application user with a single role."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False, unique=True)
    name = Column(String(100))
    email = Column(String(255), unique=True)
    password_hash = Column(String(255))
    role = Column(String(20), nullable=False, default="CUSTOMER")
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User(username='{self.username}', role='{self.role}')>"
