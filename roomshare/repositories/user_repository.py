# roomshare/repositories/user_repository.py
"""User repository."""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def list_users(self) -> List[User]:
        try:
            return self.db.query(User).order_by(User.created_at, User.id).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing users: {str(e)}")
            raise RepositoryException(f"Failed to list users: {str(e)}")

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")
