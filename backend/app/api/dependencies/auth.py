# backend/app/api/dependencies/auth.py
"""
Identity dependencies.

The caller's identity arrives pre-validated in the ``X-User-Id`` header from
an upstream gateway. These dependencies resolve it to an active User and
never authenticate anything themselves.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ...core.constants import USER_ID_HEADER
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(
    user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the caller from the identity header.

    Raises:
        HTTPException: 401 if the header is missing or names no active user
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Missing user identity", "code": "UNAUTHORIZED"},
        )

    user = RepositoryFactory.create_user_repository(db).get_active_by_id(user_id)
    if user is None:
        logger.info(f"Rejected unknown or inactive user id {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Unknown or inactive user", "code": "UNAUTHORIZED"},
        )
    return user


def get_current_trainer(current_user: User = Depends(get_current_user)) -> User:
    """
    Raises:
        HTTPException: 403 if the caller is not a trainer
    """
    if not current_user.is_trainer:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a trainer")
    return current_user


def get_current_customer(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_customer:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a customer")
    return current_user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency that ensures the caller has administrator privileges."""

    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
