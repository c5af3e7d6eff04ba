# roomshare/services/authorization.py
"""
Authorization policy for booking operations.

- ADMIN may edit/cancel any single booking and is the only role that may
  create or cancel recurring rules and occurrences.
- MEMBER may create single bookings and edit/cancel their own.
- VIEWER may create nothing.

Role decisions always use the authenticated role of the principal, never
the user it is acting as.
"""

import logging
from typing import Optional

from ..core.enums import UserRole
from ..core.exceptions import NotOwnerException, RoleNotPermittedException
from ..principal import CallerPrincipal

logger = logging.getLogger(__name__)


def require_admin(principal: CallerPrincipal, action: str) -> None:
    if not principal.is_admin:
        logger.info(
            "Denied %s for %s (role=%s)",
            action,
            principal.authenticated_user_id,
            principal.authenticated_role.value,
        )
        raise RoleNotPermittedException(f"Only administrators can {action}")


def ensure_can_create_booking(principal: CallerPrincipal) -> None:
    if principal.authenticated_role == UserRole.VIEWER:
        raise RoleNotPermittedException("Viewers cannot create bookings")


def ensure_can_modify_booking(
    principal: CallerPrincipal, owner_id: Optional[str], action: str = "modify"
) -> None:
    """Owner (effective user) or any ADMIN; everyone else gets NotOwner."""
    if principal.is_admin or principal.owns(owner_id):
        return
    raise NotOwnerException(f"Can only {action} your own bookings")
