# backend/app/repositories/user_repository.py
"""
User Repository for the trainer booking platform.

Resolves opaque user ids to identity records for the role boundary and for
the customer/trainer summaries nested in booking views.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access."""

    def __init__(self, db: Session):
        """Initialize with User model."""
        super().__init__(db, User)
        self.logger = logging.getLogger(__name__)

    def get_by_id(self, id: Any, load_relationships: bool = True) -> Optional[User]:
        if id is None:
            return None
        return super().get_by_id(id, load_relationships=False)

    def get_active_by_id(self, user_id: str) -> Optional[User]:
        """Get a user that is allowed to act, or None."""
        try:
            return (
                self.db.query(User)
                .filter(User.id == user_id, User.is_active.is_(True))
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting active user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

