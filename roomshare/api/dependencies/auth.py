# roomshare/api/dependencies/auth.py
"""
Caller identity for API routes.

Authentication itself happens upstream (gateway / identity provider). The
authenticated user id arrives in the ``X-User-Id`` header; an ADMIN may add
``X-Act-As-User-Id`` to work on behalf of another user.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ...core.enums import UserRole
from ...core.exceptions import NotFoundException, RoleNotPermittedException
from ...core.ulid_helper import is_valid_ulid
from ...models.user import User
from ...principal import CallerPrincipal
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": detail, "code": "Unauthenticated"},
    )


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user.

    Raises:
        HTTPException: 401 if the header is missing or names no known user
    """
    if not x_user_id or not is_valid_ulid(x_user_id):
        raise _unauthorized("Authentication required")

    user = RepositoryFactory.create_user_repository(db).get_by_id(x_user_id, load_relationships=False)
    if user is None:
        logger.info("Rejected request for unknown user %s", x_user_id)
        raise _unauthorized("Unknown user")
    return user


def get_current_principal(
    current_user: User = Depends(get_current_user),
    x_act_as_user_id: Optional[str] = Header(None, alias="X-Act-As-User-Id"),
    db: Session = Depends(get_db),
) -> CallerPrincipal:
    """
    Build the CallerPrincipal for the request.

    Raises:
        HTTPException: 403 if a non-admin tries to act as someone else,
            404 if the impersonated user does not exist
    """
    role = UserRole(current_user.role)
    if not x_act_as_user_id or x_act_as_user_id == current_user.id:
        return CallerPrincipal(authenticated_user_id=current_user.id, authenticated_role=role)

    if role != UserRole.ADMIN:
        raise RoleNotPermittedException(
            "Only administrators can act on behalf of another user"
        ).to_http_exception()

    target = RepositoryFactory.create_user_repository(db).get_by_id(
        x_act_as_user_id, load_relationships=False
    )
    if target is None:
        raise NotFoundException("User", x_act_as_user_id).to_http_exception()

    logger.info("User %s acting as %s", current_user.id, target.id)
    return CallerPrincipal(
        authenticated_user_id=current_user.id,
        authenticated_role=role,
        acting_as_user_id=target.id,
    )


def require_admin(
    principal: CallerPrincipal = Depends(get_current_principal),
) -> CallerPrincipal:
    """
    Dependency for admin-only routes.

    Resolved before the request body is validated, so non-admins are
    refused regardless of what they send.
    """
    if not principal.is_admin:
        raise RoleNotPermittedException().to_http_exception()
    return principal
