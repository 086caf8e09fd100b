"""Error taxonomy for fallible.

Exceptions raised at call sites (``unwrap``, ``expect``, ``match``, variant
construction) live here, together with ``RetryExhausted``: the struct carried
in the Failure channel of :func:`fallible.async_.retry`, paired with an
exception variant for raise-based code.
"""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    'ConstructionError',
    'ExpectFailedError',
    'FallibleError',
    'InvalidPatternError',
    'PreconditionError',
    'RetryExhausted',
    'RetryExhaustedError',
    'UnwrapOnFailureError',
    'UnwrapOnNoneError',
    'ValidationError',
]


class FallibleError(Exception):
    """Base class for every error raised by fallible itself."""


# --- Extraction errors ---


class UnwrapOnNoneError(FallibleError, RuntimeError):
    """``unwrap()`` was called on ``Nothing``."""

    def __init__(self) -> None:
        super().__init__('Called unwrap on None')


class UnwrapOnFailureError(FallibleError, RuntimeError):
    """``unwrap()`` was called on a ``Failure``.

    Attributes:
        error: The error payload of the Failure.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f'Called unwrap on failure: {error}')


class ExpectFailedError(FallibleError, RuntimeError):
    """``expect(message)`` was called on ``Nothing`` or a ``Failure``."""


# --- Contract errors ---


class InvalidPatternError(FallibleError, TypeError):
    """``match()`` received a missing or non-callable handler."""


class ConstructionError(FallibleError, ValueError):
    """A variant was constructed with a forbidden payload."""


class ValidationError(FallibleError, ValueError):
    """An argument of a static utility failed validation.

    Utilities that return a Result report this as ``Failure(ValidationError(...))``;
    the ones without a Result to return raise it.
    """


class PreconditionError(FallibleError, AssertionError):
    """A method was called on the wrong variant (programmer error)."""


# --- Retry errors ---


class RetryExhausted(msgspec.Struct, frozen=True, gc=False):
    """Retry gave up - struct variant for Result[T, RetryExhausted].

    ``attempts`` is 0 when the options were rejected before the first call,
    in which case ``last_error`` is the ``ValidationError``.
    """

    attempts: int
    last_error: Any

    def to_exception(self) -> RetryExhaustedError:
        """Convert to exception for raise-based code."""
        return RetryExhaustedError(self.attempts, self.last_error)


class RetryExhaustedError(FallibleError, RuntimeError):
    """Retry gave up - exception variant."""

    def __init__(self, attempts: int, last_error: Any) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f'Gave up after {attempts} attempt(s): {last_error!r}')

    def to_struct(self) -> RetryExhausted:
        """Convert to struct for Result-based code."""
        return RetryExhausted(self.attempts, self.last_error)
