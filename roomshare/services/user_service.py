# roomshare/services/user_service.py
"""
User administration for the roomshare backend.

All operations require ADMIN, and an admin can never change or remove
their own account.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..core.exceptions import NotFoundException, ValidationException
from ..models.user import User
from ..principal import CallerPrincipal
from ..repositories import RepositoryFactory
from ..repositories.user_repository import UserRepository
from .authorization import require_admin
from .base import BaseService, Clock

logger = logging.getLogger(__name__)


class UserService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[UserRepository] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(db, clock)
        self.repository = repository or RepositoryFactory.create_user_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.rule_repository = RepositoryFactory.create_recurring_rule_repository(db)

    def get_user(self, user_id: str) -> User:
        user = self.repository.get_by_id(user_id, load_relationships=False)
        if user is None:
            raise NotFoundException("User", user_id)
        return user

    def list_users(self, principal: CallerPrincipal) -> List[User]:
        require_admin(principal, "list users")
        return self.repository.list_users()

    @BaseService.measure_operation("create_user")
    def create_user(
        self,
        principal: CallerPrincipal,
        *,
        name: str,
        email: str,
        role: UserRole = UserRole.MEMBER,
    ) -> User:
        require_admin(principal, "create users")
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise ValidationException("Name is required", details={"field": "name"})
        if "@" not in email:
            raise ValidationException("A valid email is required", details={"field": "email"})
        if self.repository.get_by_email(email) is not None:
            raise ValidationException(
                "A user with this email already exists", details={"field": "email"}
            )

        with self.transaction():
            user = self.repository.create(name=name, email=email, role=role.value)

        self.log_operation("create_user", user_id=user.id, role=role.value)
        return user

    @BaseService.measure_operation("change_user_role")
    def change_role(self, user_id: str, principal: CallerPrincipal, role: UserRole) -> User:
        require_admin(principal, "change user roles")
        if user_id == principal.authenticated_user_id:
            raise ValidationException("Cannot change your own role")
        user = self.get_user(user_id)

        with self.transaction():
            user.role = role.value

        self.log_operation("change_user_role", user_id=user.id, role=role.value)
        return user

    @BaseService.measure_operation("remove_user")
    def remove_user(self, user_id: str, principal: CallerPrincipal) -> None:
        """
        Delete a user and their bookings.

        Active bookings are cancelled by the removing admin before the rows
        go. Active recurring rules owned by the user are cancelled and kept
        without an owner, so their history stays readable.
        """
        require_admin(principal, "remove users")
        if user_id == principal.authenticated_user_id:
            raise ValidationException("Cannot remove yourself")
        user = self.get_user(user_id)
        now = self.now()

        with self.transaction():
            cancelled = self.booking_repository.get_active_for_owner(user.id, now)
            for booking in cancelled:
                booking.cancel(principal.authenticated_user_id, now)
            self.db.flush()

            rules = self.rule_repository.get_all_for_owner(user.id)
            for rule in rules:
                if not rule.cancelled:
                    rule.cancel(now)
                rule.owner_id = None
            deleted = self.booking_repository.delete_for_owner(user.id)
            self.repository.delete(user.id)

        self.log_operation(
            "remove_user",
            user_id=user_id,
            cancelled_bookings=len(cancelled),
            deleted_bookings=deleted,
            detached_rules=len(rules),
        )
