# roomshare/repositories/settings_repository.py
"""Access to the singleton AppSettings row."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models.app_settings import APP_SETTINGS_ID, AppSettings
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository[AppSettings]):
    def __init__(self, db: Session):
        super().__init__(db, AppSettings)

    def get_current(self) -> Optional[AppSettings]:
        return self.get_by_id(APP_SETTINGS_ID, load_relationships=False)

    def upsert(self, **values: int) -> AppSettings:
        """Create the singleton row or update it in place."""
        existing = self.get_current()
        if existing is None:
            return self.create(id=APP_SETTINGS_ID, **values)
        for key, value in values.items():
            setattr(existing, key, value)
        self.db.flush()
        return existing
