"""
Centralized error handling decorators for database operations.
Wraps service methods so database failures are rolled back, logged with
context and surfaced as domain errors where the caller can act on them.
"""
import functools
import inspect
import logging
import traceback
from typing import Callable, Optional

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    StatementError,
    TimeoutError,
)

from core.exceptions import ConflictError, DomainError


logger = logging.getLogger(__name__)


class DatabaseErrorHandler:
    """Centralized database error handling utilities."""

    @staticmethod
    def handle_database_error(
        exc: Exception,
        operation: str,
        context: Optional[dict] = None
    ) -> tuple[bool, str]:
        """
        Handle database errors with detailed logging and classification.

        Args:
            exc: The exception that occurred
            operation: Description of the database operation
            context: Additional context information

        Returns:
            Tuple of (is_recoverable, error_message)
        """
        context_str = f" | Context: {context}" if context else ""

        if isinstance(exc, IntegrityError):
            error_msg = f"Database integrity error during {operation}: {str(exc.orig)}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        elif isinstance(exc, (ConnectionError, DisconnectionError)):
            error_msg = f"Database connection error during {operation}: {str(exc)}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        elif isinstance(exc, TimeoutError):
            error_msg = f"Database timeout during {operation}: {str(exc)}{context_str}"
            logger.warning(error_msg)
            return True, error_msg

        elif isinstance(exc, OperationalError):
            error_msg = f"Database operational error during {operation}: {str(exc)}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        elif isinstance(exc, StatementError):
            error_msg = f"Database statement error during {operation}: {str(exc)}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        else:
            error_msg = f"Unexpected database error during {operation}: {type(exc).__name__}: {str(exc)}{context_str}"
            logger.error(f"{error_msg}\nTraceback: {traceback.format_exc()}")
            return False, error_msg


def handle_database_exceptions(
    operation_name: Optional[str] = None,
    conflict_detail: Optional[str] = None,
) -> Callable:
    """
    Decorator for async service methods that own a session as ``self.db``.

    Domain errors pass through untouched. Database errors roll the session
    back and are logged; integrity errors become ConflictError when
    conflict_detail is given, everything else is re-raised.

    Args:
        operation_name: Name of the operation for logging (defaults to function name)
        conflict_detail: Message for the ConflictError raised on IntegrityError

    Returns:
        Decorated coroutine function
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} must be a coroutine function")

        @functools.wraps(func)
        async def async_wrapper(self, *args, **kwargs):
            operation = operation_name or func.__name__
            context = {
                "function": func.__name__,
                "args_count": len(args),
                "kwargs_keys": list(kwargs.keys()) if kwargs else [],
            }

            try:
                result = await func(self, *args, **kwargs)
                logger.debug(f"Successfully completed {operation}")
                return result

            except DomainError:
                raise

            except IntegrityError as exc:
                await self.db.rollback()
                DatabaseErrorHandler.handle_database_error(exc, operation, context)
                if conflict_detail:
                    raise ConflictError(conflict_detail) from exc
                raise

            except SQLAlchemyError as exc:
                await self.db.rollback()
                DatabaseErrorHandler.handle_database_error(exc, operation, context)
                raise

        return async_wrapper

    return decorator
