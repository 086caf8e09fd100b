"""safe_assert, assert_result and variant assertion helpers.

Provides assertion utilities that work correctly with Result and Option:
- safe_assert: Always runs, even with python -O
- assert_result: Returns Result[None, E] based on condition
- is_result / is_option: structural variant checks
- assert_is_*: narrow a Result/Option or raise AssertionError
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeIs, overload

from fallible.option import Nothing, Option, Some
from fallible.result import Failure, Result, Success

__all__ = [
    'assert_is_defined',
    'assert_is_err',
    'assert_is_none',
    'assert_is_ok',
    'assert_is_some',
    'assert_result',
    'is_option',
    'is_result',
    'safe_assert',
]


def safe_assert(
    condition: bool,
    message: str = '',
    *,
    error: type[Exception] = AssertionError,
) -> None:
    """Assert that works even in optimized mode (-O flag).

    Unlike the built-in assert, this always executes regardless of __debug__.

    Args:
        condition: The condition to check.
        message: Error message if the assertion fails.
        error: Exception type to raise. Defaults to AssertionError.

    Raises:
        error: If condition is False.

    Example:
        ```python
        safe_assert(1 + 1 == 2)  # passes
        safe_assert(False, 'This always fails')  # raises AssertionError
        safe_assert(callable(fn), 'fn must be callable', error=ValidationError)
        ```
    """
    if not condition:
        raise error(message)


@overload
def assert_result[E](condition: bool, error: E) -> Result[None, E]: ...


@overload
def assert_result[E](condition: bool, error: Callable[[], E], *, lazy: bool = True) -> Result[None, E]: ...


def assert_result[E](
    condition: bool,
    error: E | Callable[[], E],
    *,
    lazy: bool = False,
) -> Result[None, E]:
    """Return Success(None) if condition is True, else Failure(error).

    Useful in validation pipelines chained with ``and_then``.

    Args:
        condition: The condition to check.
        error: The error value, or a callable that produces it (if lazy=True).
        lazy: If True, treat error as a callable and only invoke it on failure.

    Example:
        ```python
        assert_result(True, 'error')
        # Success(data=None)

        assert_result(False, lambda: ValueError('lazy error'), lazy=True)
        # Failure(error=ValueError('lazy error'))
        ```
    """
    if condition:
        return Success(None)

    if lazy and callable(error):
        return Failure(error())  # type: ignore[return-value]
    return Failure(error)  # type: ignore[arg-type]


def is_result(value: Any) -> TypeIs[Result[Any, Any]]:
    """Return True if value is a Success or a Failure."""
    return isinstance(value, Success | Failure)


def is_option(value: Any) -> TypeIs[Option[Any]]:
    """Return True if value is a Some or a Nothing."""
    return isinstance(value, Some | Nothing)


def assert_is_ok[T](result: Result[T, Any]) -> Success[T]:
    """Return result narrowed to Success, or raise AssertionError."""
    safe_assert(isinstance(result, Success), 'Result is an error')
    return result  # type: ignore[return-value]


def assert_is_err[E](result: Result[Any, E]) -> Failure[E]:
    """Return result narrowed to Failure, or raise AssertionError."""
    safe_assert(isinstance(result, Failure), 'Result is a success')
    return result  # type: ignore[return-value]


def assert_is_some[T](option: Option[T]) -> Some[T]:
    """Return option narrowed to Some, or raise AssertionError."""
    safe_assert(isinstance(option, Some), 'Option is None')
    return option  # type: ignore[return-value]


def assert_is_none(option: Option[Any]) -> Nothing:
    """Return option narrowed to Nothing, or raise AssertionError."""
    safe_assert(isinstance(option, Nothing), 'Option is Some')
    return option  # type: ignore[return-value]


def assert_is_defined[T](value: T | None) -> T:
    """Return value if it is not None, or raise AssertionError."""
    safe_assert(value is not None, 'Value is undefined or null')
    return value  # type: ignore[return-value]
