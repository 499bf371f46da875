import enum
import uuid

from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.sql import func

from .base import Base


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255))
    username = Column(String(100), unique=True)
    image = Column(String(512))  # Avatar URL from object storage
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.USER)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"
