"""Retry an async operation with exponential backoff.

Each call goes through ``Attempting(1..max_attempts)`` and ends either
``Success(value)`` or ``Failure(RetryExhausted(attempts, last_error))``.
Options are validated before the first attempt; invalid ones end in
``RetryExhausted(0, ValidationError)`` without calling the function.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import anyio
import msgspec

from fallible._config import RetryPolicy, get_config
from fallible._logging import get_logger
from fallible.errors import RetryExhausted, ValidationError
from fallible.result import Failure, Result, Success

__all__ = ['retry']

logger = get_logger(__name__)


def _resolve_policy(**options: Any) -> RetryPolicy:
    overrides = {name: value for name, value in options.items() if value is not None}
    return msgspec.structs.replace(get_config().retry, **overrides)


async def retry[T](
    fn: Callable[[], Awaitable[T]],
    *,
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
    exponential_base: float | None = None,
) -> Result[T, RetryExhausted]:
    """Call fn until it succeeds or the attempts run out.

    After failed attempt ``n`` (when another attempt remains) the call
    sleeps ``min(base_delay * exponential_base ** (n - 1), max_delay)``
    milliseconds. Options left as None come from the configured
    RetryPolicy (3 attempts, 100 ms base, 5000 ms cap, base 2 by default).

    Args:
        fn: Zero-argument async function to call.
        max_attempts: Total number of calls, a positive integer.
        base_delay: Delay in ms after the first failure, non-negative.
        max_delay: Upper bound in ms for a single delay, non-negative.
        exponential_base: Delay growth factor, strictly positive.

    Returns:
        Success(value) from the first successful call, or
        Failure(RetryExhausted(attempts, last_error)).

    Example:
        ```python
        result = await retry(lambda: fetch_flaky('/endpoint'), max_attempts=5, base_delay=200)
        ```
    """
    if not callable(fn):
        return Failure(RetryExhausted(0, ValidationError('retry requires a function argument')))

    policy = _resolve_policy(
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
    )
    checked = policy.check()
    if isinstance(checked, Failure):
        logger.debug('retry_invalid_options', error=str(checked.error))
        return Failure(RetryExhausted(0, checked.error))

    last_error: Exception | None = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return Success(await fn())
        except Exception as e:
            last_error = e

        if attempt < policy.max_attempts:
            delay = policy.delay_for(attempt)
            logger.debug(
                'retry_attempt_failed',
                attempt=attempt,
                max_attempts=policy.max_attempts,
                delay_ms=delay,
                error=repr(last_error),
            )
            await anyio.sleep(delay / 1000)

    logger.warning('retry_exhausted', attempts=policy.max_attempts, error=repr(last_error))
    return Failure(RetryExhausted(policy.max_attempts, last_error))
