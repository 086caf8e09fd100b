"""Race an awaitable against a timer."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from numbers import Real
from typing import Any

import anyio

from fallible._config import get_config
from fallible._logging import get_logger
from fallible.errors import ValidationError
from fallible.result import Failure, Result, Success

__all__ = ['with_timeout']

logger = get_logger(__name__)

_UNSET: Any = object()


async def with_timeout[T, E](
    awaitable: Awaitable[T],
    timeout_ms: float,
    timeout_error: E = _UNSET,
) -> Result[T, E | ValidationError]:
    """Await ``awaitable`` for at most ``timeout_ms`` milliseconds.

    Whichever finishes first decides the outcome. An exception raised by
    the awaitable before the deadline propagates.

    Unlike a plain race, the losing awaitable does not keep running: when
    the timer wins, the enclosing anyio cancel scope cancels it. Work that
    must outlive the deadline belongs in its own task.

    Args:
        awaitable: The awaitable to race.
        timeout_ms: Deadline in milliseconds, strictly positive.
        timeout_error: Error for the timed-out case. Defaults to the
            configured ``timeout_error`` (``'Operation timed out'``).

    Returns:
        Success(value), Failure(timeout_error), or Failure(ValidationError)
        for a non-awaitable argument or a non-positive timeout.

    Example:
        ```python
        result = await with_timeout(client.get('/slow'), 5000, 'request timed out')
        ```
    """
    if not inspect.isawaitable(awaitable):
        return Failure(ValidationError('with_timeout requires an awaitable argument'))

    if not isinstance(timeout_ms, Real) or isinstance(timeout_ms, bool) or timeout_ms <= 0:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        return Failure(ValidationError('timeout_ms must be a positive number'))

    if timeout_error is _UNSET:
        timeout_error = get_config().timeout_error

    with anyio.move_on_after(timeout_ms / 1000) as scope:
        value = await awaitable

    if scope.cancelled_caught:
        logger.debug('timeout_elapsed', timeout_ms=timeout_ms)
        return Failure(timeout_error)
    return Success(value)
