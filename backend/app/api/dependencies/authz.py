# backend/app/api/dependencies/authz.py
"""
Authorization helpers for API routes.

Provides a reusable role dependency on top of the identity header.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from fastapi import Depends, HTTPException, status

from app.api.dependencies.auth import get_current_user
from app.core.enums import RoleName
from app.models.user import User

logger = logging.getLogger(__name__)


def require_roles(*roles: RoleName) -> Callable[..., User]:
    """Ensure the current user holds one of the provided roles."""

    required = sorted(role.value for role in roles)

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User lacks required role(s): {', '.join(required)}",
            )
        return current_user

    return checker
