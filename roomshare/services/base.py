# roomshare/services/base.py
"""
Base Service for the roomshare backend

Every service gets:
- the request's database session and an injectable clock
- ``transaction()`` committing one unit of work
- ``measure_operation`` feeding the prometheus collectors
- ``log_operation`` for structured info records
"""

from contextlib import contextmanager
from datetime import datetime
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import DomainException, ServiceException
from ..core.timezone_utils import utc_now
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

F = TypeVar("F", bound=Callable[..., Any])


class BaseService:
    """Common plumbing for the service layer."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        """
        Args:
            db: Database session of the current request
            clock: Callable returning the current aware UTC instant; defaults
                to the wall clock
        """
        self.db = db
        self.clock: Clock = clock or utc_now
        self.logger = logging.getLogger(self.__class__.__name__)

    def now(self) -> datetime:
        return self.clock()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit the enclosed writes as one unit.

        Usage:
            with self.transaction():
                booking.cancel(user_id, now)

        Database failures are logged and surface as ``ServiceException``
        (kind ``Unexpected``); domain exceptions pass through after rollback.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed: {str(e)}")
            self.db.rollback()
            raise ServiceException(f"Database operation failed: {str(e)}") from e
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Time a service method and record the outcome.

        Usage:
            @BaseService.measure_operation("cancel_booking")
            def cancel_booking(self, booking_id, principal):
                ...

        Domain rejections are also counted per error kind.
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self, *args, **kwargs):
                started = time.perf_counter()
                status = "error"
                error_type = None

                try:
                    result = func(self, *args, **kwargs)
                    status = "success"
                    return result
                except DomainException as e:
                    error_type = type(e).__name__
                    prometheus_metrics.record_rejection(operation_name, e.kind.value)
                    raise
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    elapsed = time.perf_counter() - started
                    if elapsed > settings.slow_operation_threshold_seconds:
                        self.logger.warning(
                            f"Slow operation detected: {operation_name} took {elapsed:.2f}s"
                        )
                    prometheus_metrics.record_service_operation(
                        service=self.__class__.__name__,
                        operation=operation_name,
                        duration=elapsed,
                        status=status,
                        error_type=error_type,
                    )

            return cast(F, wrapper)

        return decorator

    def log_operation(self, operation: str, **context: Any) -> None:
        """Info record with the context fields attached as ``extra``."""
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})
