# backend/app/models/user.py
"""
User model for the trainer booking platform.

Users are identity references only: the booking core never authenticates
anyone. A user id is resolved to a role (trainer, customer or admin) and a
display name used in booking summaries.

Classes:
    User: Identity record for trainers, customers and admins
"""

import logging

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func

from ..core.enums import RoleName
from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    """
    Identity record referenced by availability, slots and bookings.

    Attributes:
        id: ULID primary key
        email: Unique email address
        first_name: User's first name
        last_name: User's last name
        role: One of RoleName
        is_active: Whether the account may act
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default=RoleName.CUSTOMER.value, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"

    @property
    def full_name(self) -> str:
        parts = [self.first_name or "", self.last_name or ""]
        return " ".join(p for p in parts if p).strip()

    def has_role(self, *roles: RoleName) -> bool:
        return self.role in {r.value for r in roles}

    @property
    def is_trainer(self) -> bool:
        return self.role == RoleName.TRAINER.value

    @property
    def is_customer(self) -> bool:
        return self.role == RoleName.CUSTOMER.value

    @property
    def is_admin(self) -> bool:
        return self.role == RoleName.ADMIN.value
