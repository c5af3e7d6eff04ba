# roomshare/repositories/factory.py
"""
Repository Factory for the roomshare backend

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .conflict_checker_repository import ConflictCheckerRepository
    from .recurring_rule_repository import RecurringRuleRepository
    from .room_repository import BlockedTimeRangeRepository, RoomRepository
    from .settings_repository import SettingsRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        """Create repository for conflict checking queries."""
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking operations."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_recurring_rule_repository(db: Session) -> "RecurringRuleRepository":
        """Create repository for recurring rule operations."""
        from .recurring_rule_repository import RecurringRuleRepository

        return RecurringRuleRepository(db)

    @staticmethod
    def create_room_repository(db: Session) -> "RoomRepository":
        from .room_repository import RoomRepository

        return RoomRepository(db)

    @staticmethod
    def create_blocked_range_repository(db: Session) -> "BlockedTimeRangeRepository":
        from .room_repository import BlockedTimeRangeRepository

        return BlockedTimeRangeRepository(db)

    @staticmethod
    def create_settings_repository(db: Session) -> "SettingsRepository":
        from .settings_repository import SettingsRepository

        return SettingsRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)
