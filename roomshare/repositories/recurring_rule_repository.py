# roomshare/repositories/recurring_rule_repository.py
"""
Recurring rule repository.

Rules are never deleted, so every read here is a plain filter over the
rule table; expansion into occurrences happens in the service layer.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.recurring_booking import RecurringBookingRule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RecurringRuleRepository(BaseRepository[RecurringBookingRule]):
    def __init__(self, db: Session):
        super().__init__(db, RecurringBookingRule)

    def get_rules_for_room(
        self, room_id: str, include_cancelled: bool = False
    ) -> List[RecurringBookingRule]:
        """Rules of a room ordered by weekday then start minute."""
        try:
            query = self.db.query(RecurringBookingRule).filter(
                RecurringBookingRule.room_id == room_id
            )
            if not include_cancelled:
                query = query.filter(RecurringBookingRule.cancelled.is_(False))
            return query.order_by(
                RecurringBookingRule.day_of_week, RecurringBookingRule.start_minute
            ).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting recurring rules for room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to get recurring rules: {str(e)}")

    def get_all_for_owner(self, owner_id: str) -> List[RecurringBookingRule]:
        return self.find_by(owner_id=owner_id)
