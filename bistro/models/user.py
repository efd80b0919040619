"""
User model, read by the reservation core to address notifications
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import DateTime
from datetime import datetime
from typing import Optional
import uuid
from enum import Enum

from bistro.core.clock import utc_now


class UserRole(str, Enum):
    """User roles"""
    CUSTOMER = "customer"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """Registered user (customer or staff)"""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Authentication
    email: str = Field(index=True, unique=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)

    # Profile
    name: str = Field(nullable=False, max_length=100)
    surname: str = Field(nullable=False, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50, nullable=True)

    role: UserRole = Field(default=UserRole.CUSTOMER, nullable=False)
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
