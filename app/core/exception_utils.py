import functools
import logging
from typing import Any, Callable, Optional, Type

from app.core.exceptions import BookstoreException, StoreError

logger = logging.getLogger(__name__)


def raise_for_status(
    *,
    condition: bool,
    exception: Type[BookstoreException],
    detail: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Raise ``exception`` when ``condition`` holds."""
    if condition:
        raise exception(detail, **kwargs)


def handle_exceptions(
    default_exception: Type[BookstoreException] = StoreError,
    message: str = "An unexpected error occurred.",
) -> Callable:
    """
    Decorator for async repository methods.

    Application errors pass through untouched. Anything else is logged and
    re-raised as ``default_exception`` whose detail is the original failure
    message, so callers can surface it.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except BookstoreException:
                raise
            except Exception as e:
                logger.error(
                    f"{message} ({func.__qualname__}): {e}",
                    exc_info=True,
                )
                raise default_exception(str(e)) from e

        return wrapper

    return decorator
