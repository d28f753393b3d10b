"""Error logging for use case boundaries.

Wraps each use case so failures are logged once, at the edge of the core,
with a level that reflects whether they are expected business rejections or
programming errors. Exceptions are always re-raised.
"""

from collections.abc import Awaitable, Callable
import functools
from typing import Any, ParamSpec, TypeVar

from music_distribution.config import get_logger
from music_distribution.domain.errors import MusicDistributionError

logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def use_case_boundary(
    operation_name: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator for use case entry points with standardized error logging.

    Args:
        operation_name: Name used in log records (defaults to function name)

    Example:
        >>> @use_case_boundary("distribute_release")
        >>> async def distribute_release(self, release_id):
        >>>     ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except MusicDistributionError as e:
                bound = logger.bind(operation=op_name, **_error_context(e))
                if e.is_expected:
                    bound.warning("{} rejected: {}", op_name, e.message)
                else:
                    bound.exception("{} hit an invariant violation: {}", op_name, e.message)
                raise
            except Exception as e:
                logger.bind(operation=op_name).exception("Error in {}: {!s}", op_name, e)
                raise

        return wrapper

    return decorator


def _error_context(error: MusicDistributionError) -> dict[str, Any]:
    return {"error_code": error.code, "error_category": error.category.value}
