"""
Repository layer for the roomshare backend.

Repositories own all SQLAlchemy queries; services own transactions and
business rules.
"""

from .base_repository import BaseRepository
from .factory import RepositoryFactory

__all__ = ["BaseRepository", "RepositoryFactory"]
