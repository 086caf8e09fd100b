"""Package configuration: RetryPolicy, FallibleConfig, and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import TYPE_CHECKING, Any

import msgspec

from fallible._logging import configure_logging

if TYPE_CHECKING:
    from fallible.errors import ValidationError
    from fallible.result import Result

__all__ = [
    'FallibleConfig',
    'RetryPolicy',
    'get_config',
    'init',
    'reset',
]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class RetryPolicy(msgspec.Struct, frozen=True, gc=False):
    """Exponential backoff settings for :func:`fallible.async_.retry`.

    Delays are in milliseconds. The delay after failed attempt ``n`` is
    ``min(base_delay * exponential_base ** (n - 1), max_delay)``.

    Attributes:
        max_attempts: Total number of calls, first one included.
        base_delay: Delay after the first failure.
        max_delay: Upper bound for any single delay.
        exponential_base: Growth factor between consecutive delays.
    """

    max_attempts: int = 3
    base_delay: float = 100
    max_delay: float = 5000
    exponential_base: float = 2

    def delay_for(self, attempt: int) -> float:
        """Return the delay in milliseconds to wait after ``attempt`` failed.

        Growth past the float range saturates at ``max_delay``.
        """
        try:
            delay = self.base_delay * self.exponential_base ** (attempt - 1)
        except OverflowError:
            return self.max_delay
        return min(delay, self.max_delay)

    def check(self) -> Result[RetryPolicy, ValidationError]:
        """Validate the policy.

        Returns:
            Success(self), or Failure(ValidationError) naming the first
            offending option.
        """
        from fallible.errors import ValidationError
        from fallible.result import Failure, Success

        attempts = self.max_attempts
        if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 1:
            return Failure(ValidationError('max_attempts must be a positive integer'))
        if not _is_number(self.base_delay) or not _is_number(self.max_delay):
            return Failure(ValidationError('base_delay and max_delay must be numbers'))
        if not _is_number(self.exponential_base):
            return Failure(ValidationError('exponential_base must be a number'))
        if self.base_delay < 0 or self.max_delay < 0 or self.exponential_base <= 0:
            return Failure(ValidationError('Delays and exponential base must be non-negative numbers'))
        return Success(self)


@dataclass(frozen=True)
class FallibleConfig:
    """Configuration for fallible.

    Attributes:
        retry: Default backoff policy used by retry().
        missing_value: Error used by result.from_nullable() when none is given.
        timeout_error: Error used by with_timeout() when none is given.
        log_level: Logging level (e.g. "DEBUG", "INFO"). None = silent.
        json_logs: Render logs as JSON (True) or for the console (False).
    """

    retry: RetryPolicy = field(default_factory=RetryPolicy)
    missing_value: Any = 'missing_value'
    timeout_error: Any = 'Operation timed out'
    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init())
_config: FallibleConfig | None = None


def _detect_log_level() -> str | None:
    """Read the logging level from FALLIBLE_LOG_LEVEL, if set."""
    level = os.environ.get('FALLIBLE_LOG_LEVEL', '').strip().upper()
    if not level:
        return None
    if level not in logging.getLevelNamesMapping():
        logging.warning("Unknown FALLIBLE_LOG_LEVEL value '%s', logging stays silent", level)
        return None
    return level


def _detect_json_logs() -> bool:
    """Read the log format from FALLIBLE_LOG_FORMAT ("json" or "console")."""
    fmt = os.environ.get('FALLIBLE_LOG_FORMAT', 'json').strip().lower()
    if fmt not in ('json', 'console'):
        logging.warning("Unknown FALLIBLE_LOG_FORMAT value '%s', defaulting to json", fmt)
        return True
    return fmt == 'json'


def init(
    retry: RetryPolicy | None = None,
    *,
    missing_value: Any = None,
    timeout_error: Any = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
    **retry_overrides: Any,
) -> FallibleConfig:
    """Initialize fallible with the given configuration.

    Args:
        retry: Default retry policy. Keyword overrides such as
            ``max_attempts=5`` are applied on top of it.
        missing_value: Default error for result.from_nullable().
        timeout_error: Default error for with_timeout().
        log_level: Logging level. Read from FALLIBLE_LOG_LEVEL if None.
        json_logs: Log format. Read from FALLIBLE_LOG_FORMAT if None.
        **retry_overrides: RetryPolicy fields to override.

    Returns:
        The FallibleConfig that was set.

    Example:
        ```python
        import fallible

        fallible.init(max_attempts=5, base_delay=250, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    policy = retry if retry is not None else RetryPolicy()
    if retry_overrides:
        policy = msgspec.structs.replace(policy, **retry_overrides)

    defaults = FallibleConfig()
    resolved_level = log_level if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()

    _config = replace(
        defaults,
        retry=policy,
        missing_value=defaults.missing_value if missing_value is None else missing_value,
        timeout_error=defaults.timeout_error if timeout_error is None else timeout_error,
        log_level=resolved_level,
        json_logs=resolved_json,
    )

    # Configure logging if level specified
    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> FallibleConfig:
    """Get the current configuration.

    Returns:
        The FallibleConfig set by init(), or the defaults if init() was
        never called.
    """
    if _config is None:
        return FallibleConfig()
    return _config


def reset() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
