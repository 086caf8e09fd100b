"""Await fallible work and capture exceptions as Failures."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from fallible._logging import get_logger
from fallible.errors import ValidationError
from fallible.result import Failure, Result, Success

__all__ = ['from_awaitable', 'try_catch']

logger = get_logger(__name__)


async def try_catch[T](fn: Callable[[], Awaitable[T]]) -> Result[T, Any]:
    """Await fn() and wrap the outcome.

    Args:
        fn: Zero-argument async function (or any callable returning an
            awaitable) that may raise.

    Returns:
        Success(value) on completion, Failure(exception) if it raised, or
        Failure(ValidationError) if fn is not callable.

    Example:
        ```python
        result = await try_catch(lambda: client.get('/api/users'))
        ```
    """
    if not callable(fn):
        return Failure(ValidationError('try_catch requires a function argument'))

    try:
        return Success(await fn())
    except Exception as e:
        logger.debug('awaitable_failed', source='try_catch', error=repr(e))
        return Failure(e)


async def from_awaitable[T](awaitable: Awaitable[T]) -> Result[T, Any]:
    """Await an awaitable and wrap the outcome.

    Returns:
        Success(value), Failure(exception), or Failure(ValidationError) if
        the argument is not awaitable.
    """
    if not inspect.isawaitable(awaitable):
        return Failure(ValidationError('from_awaitable requires an awaitable argument'))

    try:
        return Success(await awaitable)
    except Exception as e:
        logger.debug('awaitable_failed', source='from_awaitable', error=repr(e))
        return Failure(e)
