"""safe_try and the from_throwable decorators for capturing exceptions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from fallible.errors import ValidationError
from fallible.result import Failure, Result, Success

__all__ = ['from_throwable', 'from_throwable_async', 'safe_try']


def safe_try[T](fn: Callable[[], T]) -> Result[T, Exception]:
    """Call fn and capture what it raises.

    Args:
        fn: Zero-argument function that may raise.

    Returns:
        Success(fn()), Failure(exception), or Failure(ValidationError) if
        fn is not callable.

    Example:
        ```python
        safe_try(lambda: json.loads(payload))
        # Success(data={...}) or Failure(error=JSONDecodeError(...))
        ```
    """
    if not callable(fn):
        return Failure(ValidationError('safe_try requires a function argument'))

    try:
        return Success(fn())
    except Exception as e:
        return Failure(e)


@overload
def from_throwable[**P, T](
    fn: Callable[P, T],
) -> Callable[P, Success[T] | Failure[Exception]]: ...


@overload
def from_throwable[**P, T, E: BaseException](
    fn: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Success[T] | Failure[E]]]: ...


def from_throwable[**P, T](
    fn: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Turn a raising function into one that returns a Result.

    Each call of the wrapper behaves like safe_try around the original call.
    Can be used as a plain function or as a decorator, with or without
    arguments:

        safe_int = from_throwable(int)

        @from_throwable
        def risky(): ...

        @from_throwable(exceptions=(ValueError, KeyError))
        def specific(): ...

    Args:
        fn: The function to wrap.
        exceptions: Exception types to capture. Defaults to (Exception,);
            anything else propagates.

    Returns:
        A wrapped function that returns Result[T, E] instead of T.

    Raises:
        ValidationError: If fn is given but not callable.
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Success[T] | Failure[Any]:
        try:
            return Success(wrapped(*args, **kwargs))
        except catch as e:
            return Failure(e)

    if fn is not None:
        if not callable(fn):
            raise ValidationError('from_throwable requires a function argument')
        return wrapper(fn)
    return wrapper


@overload
def from_throwable_async[**P, T](
    fn: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Success[T] | Failure[Exception]]]: ...


@overload
def from_throwable_async[**P, T, E: BaseException](
    fn: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Success[T] | Failure[E]]]]: ...


def from_throwable_async[**P, T](
    fn: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Async variant of from_throwable for coroutine functions.

    Example:
        ```python
        @from_throwable_async
        async def fetch(url: str) -> bytes:
            return await client.get(url)

        await fetch('https://example.com')  # Success(...) or Failure(...)
        ```
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Success[T] | Failure[Any]:
        try:
            return Success(await wrapped(*args, **kwargs))
        except catch as e:
            return Failure(e)

    if fn is not None:
        if not callable(fn):
            raise ValidationError('from_throwable_async requires a function argument')
        return wrapper(fn)
    return wrapper
