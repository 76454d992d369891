"""Decorators for storage services."""
import functools
import logging
from typing import Callable
from sqlalchemy.exc import SQLAlchemyError
from network_crm.core.exceptions import StorageError

logger = logging.getLogger(__name__)


def storage_operation(method: Callable):
    """
    Decorator translating database failures raised by a service method.

    The wrapped method must belong to an object exposing ``self.session``.
    On any SQLAlchemy error the session is rolled back, the failure is logged
    with its traceback and a StorageError is raised in its place, so callers
    can tell infrastructure failures apart from "not found" results.

    Usage:
        class ContactService:
            @storage_operation
            async def list_contacts(self, user_id):
                ...

    Args:
        method: The async service method to wrap

    Returns:
        Wrapped method
    """
    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            try:
                await self.session.rollback()
            except SQLAlchemyError as rollback_err:
                logger.error(f"Error during rollback in {method.__qualname__}: {rollback_err}")
            logger.exception(f"Storage error in {method.__qualname__}: {e}")
            raise StorageError(f"{method.__qualname__} failed") from e

    return wrapper
