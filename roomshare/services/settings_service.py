# roomshare/services/settings_service.py
"""
Booking settings snapshot and administration.

Every booking operation takes one ``SettingsSnapshot`` at its start and
uses it throughout, so a concurrent settings change never applies halfway
through a validation.
"""

from dataclasses import asdict, dataclass
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.config import settings as app_config
from ..core.exceptions import ValidationException
from ..principal import CallerPrincipal
from ..repositories.factory import RepositoryFactory
from ..repositories.settings_repository import SettingsRepository
from .authorization import require_admin
from .base import BaseService, Clock

logger = logging.getLogger(__name__)

# (min, max) accepted for each setting
SETTING_BOUNDS: Dict[str, tuple[int, int]] = {
    "granularity_minutes": (5, 120),
    "max_advance_days": (1, 365),
    "max_booking_duration_hours": (1, 24),
    "max_active_bookings": (1, 50),
}


@dataclass(frozen=True)
class SettingsSnapshot:
    granularity_minutes: int
    max_advance_days: int
    max_booking_duration_hours: int
    max_active_bookings: int

    @classmethod
    def defaults(cls) -> "SettingsSnapshot":
        return cls(
            granularity_minutes=app_config.default_granularity_minutes,
            max_advance_days=app_config.default_max_advance_days,
            max_booking_duration_hours=app_config.default_max_booking_duration_hours,
            max_active_bookings=app_config.default_max_active_bookings,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[SettingsRepository] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(db, clock)
        self.repository = repository or RepositoryFactory.create_settings_repository(db)

    def get_snapshot(self) -> SettingsSnapshot:
        """Current settings, or configured defaults until an admin saves some."""
        row = self.repository.get_current()
        if row is None:
            return SettingsSnapshot.defaults()
        return SettingsSnapshot(
            granularity_minutes=row.granularity_minutes,
            max_advance_days=row.max_advance_days,
            max_booking_duration_hours=row.max_booking_duration_hours,
            max_active_bookings=row.max_active_bookings,
        )

    @BaseService.measure_operation("update_settings")
    def update_settings(
        self,
        principal: CallerPrincipal,
        *,
        granularity_minutes: int,
        max_advance_days: int,
        max_booking_duration_hours: int,
        max_active_bookings: int,
    ) -> SettingsSnapshot:
        require_admin(principal, "change settings")

        values = {
            "granularity_minutes": granularity_minutes,
            "max_advance_days": max_advance_days,
            "max_booking_duration_hours": max_booking_duration_hours,
            "max_active_bookings": max_active_bookings,
        }
        for name, value in values.items():
            low, high = SETTING_BOUNDS[name]
            if not low <= value <= high:
                raise ValidationException(
                    f"{name} must be between {low} and {high}",
                    details={"field": name, "min": low, "max": high, "value": value},
                )

        with self.transaction():
            self.repository.upsert(**values)

        self.log_operation("update_settings", updated_by=principal.authenticated_user_id, **values)
        return SettingsSnapshot(**values)
