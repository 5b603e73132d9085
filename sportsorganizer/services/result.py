"""
Result values for fallible remote calls.

Service methods that talk to the repository on behalf of a screen return
either Success(data) or Error(message) instead of raising, so callers can
branch on the outcome.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from ..storage.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful call carrying its payload."""
    data: T


@dataclass(frozen=True)
class Error:
    """Failed call carrying a human-readable message."""
    message: str
    not_found: bool = False


Result = Union[Success[T], Error]


def run_remote(fn: Callable[..., T], *args: Any, **kwargs: Any) -> 'Result[T]':
    """
    Call a repository-backed function and wrap the outcome.

    Storage failures become Error(message); anything else propagates.
    """
    try:
        return Success(fn(*args, **kwargs))
    except DatabaseError as e:
        logger.error(f"{getattr(fn, '__name__', 'remote call')} failed: {e}")
        return Error(str(e) or e.__class__.__name__, not_found=isinstance(e, NotFoundError))
