"""Principal abstraction for callers of the booking core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.enums import UserRole


@dataclass(frozen=True)
class CallerPrincipal:
    """
    The caller of a booking operation.

    ``authenticated_user_id``/``authenticated_role`` describe who actually
    signed in. An admin may set ``acting_as_user_id`` to work on behalf of
    another user: ownership and quota then apply to that user, while every
    role decision still uses ``authenticated_role``.
    """

    authenticated_user_id: str
    authenticated_role: UserRole
    acting_as_user_id: Optional[str] = None

    def __post_init__(self) -> None:
        if (
            self.acting_as_user_id is not None
            and self.acting_as_user_id != self.authenticated_user_id
            and self.authenticated_role != UserRole.ADMIN
        ):
            raise ValueError("Only administrators may act as another user")

    @property
    def effective_user_id(self) -> str:
        return self.acting_as_user_id or self.authenticated_user_id

    @property
    def is_admin(self) -> bool:
        return self.authenticated_role == UserRole.ADMIN

    @property
    def is_impersonating(self) -> bool:
        return (
            self.acting_as_user_id is not None
            and self.acting_as_user_id != self.authenticated_user_id
        )

    def owns(self, owner_id: Optional[str]) -> bool:
        return owner_id is not None and owner_id == self.effective_user_id
