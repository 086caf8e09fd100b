"""Result type: Success[T] | Failure[E] for explicit error handling.

Example:
    ```python
    from fallible import err, ok

    ok(5).map(lambda x: x * 2).unwrap()  # 10

    err('e').or_else(lambda e: ok(f'recovered {e}')).unwrap()  # 'recovered e'
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from fallible._config import get_config
from fallible.errors import (
    ExpectFailedError,
    InvalidPatternError,
    PreconditionError,
    UnwrapOnFailureError,
    ValidationError,
)

if TYPE_CHECKING:
    from fallible.option import Option

__all__ = [
    'Failure',
    'Result',
    'Success',
    'err',
    'from_nullable',
    'from_tuple',
    'match',
    'ok',
    'to_option',
]

_PATTERN_MESSAGE = 'Invalid pattern object: both ok and err handlers must be functions'


def _check_handlers(ok: Any, err: Any) -> None:
    if not callable(ok) or not callable(err):
        raise InvalidPatternError(_PATTERN_MESSAGE)


class Success[T](msgspec.Struct, frozen=True, gc=False, tag='success'):
    """Success variant of Result containing a value of type T.

    ``data`` may be any value, ``None`` included: having run successfully
    is independent of what the operation produced.

    Examples:
        >>> Success(42).unwrap()
        42
        >>> Success(42).map(lambda x: x * 2)
        Success(data=84)
    """

    data: T

    def __iter__(self) -> Iterator[T]:
        yield self.data

    def is_ok(self) -> TypeIs[Success[T]]:
        """Return True since this is Success."""
        return True

    def is_err(self) -> TypeIs[Failure[Any]]:
        """Return False since this is Success."""
        return False

    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return the predicate applied to the data."""
        return predicate(self.data)

    def is_err_and(self, _predicate: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def map[U](self, f: Callable[[T], U]) -> Success[U]:
        """Apply a function to the data.

        Exceptions raised by ``f`` propagate; wrap the call in
        :func:`fallible.safe_try` to capture them.

        Args:
            f: Function to apply to the Success data.

        Returns:
            Success containing the result of applying f to the data.
        """
        return Success(f(self.data))

    def map_error[F](self, _f: Callable[[Any], F]) -> Success[T]:
        """Return self unchanged since this is Success."""
        return self

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the data, ignoring the default."""
        return f(self.data)

    def map_or_else[U](self, _err_f: Callable[[Any], U], ok_f: Callable[[T], U]) -> U:
        """Apply ``ok_f`` to the data."""
        return ok_f(self.data)

    def flat_map[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain another fallible step.

        Also known as bind. ``and_then`` is an alias.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.data)

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias of :meth:`flat_map`."""
        return f(self.data)

    def or_else[F](self, _f: Callable[[Any], Result[T, F]]) -> Success[T]:
        """Return self without calling the recovery function."""
        return self

    def and_[U, E](self, other: Result[U, E]) -> Result[U, E]:
        """Return other since self is Success."""
        return other

    def or_[F](self, _other: Result[T, F]) -> Success[T]:
        """Return self since self is Success."""
        return self

    def flatten[U, E](self: Success[Result[U, E]]) -> Result[U, E]:
        """Flatten a nested Result.

        Converts Result[Result[U, E], E] into Result[U, E].

        A Success whose data is not a Result is returned unchanged.
        """
        if isinstance(self.data, Success | Failure):
            return self.data
        return self  # type: ignore[return-value]

    def contains(self, value: Any) -> bool:
        """Return True if the data equals ``value``."""
        return self.data == value

    def contains_err(self, _error: Any) -> bool:
        """Return False since there is no error."""
        return False

    def unwrap(self) -> T:
        """Return the data."""
        return self.data

    def unwrap_or(self, _default: T) -> T:
        """Return the data, ignoring the default."""
        return self.data

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the data without calling the fallback."""
        return self.data

    def unwrap_err(self) -> NoReturn:
        """Raise since a Success has no error.

        Raises:
            PreconditionError: Always.
        """
        raise PreconditionError(f'Success has no error: Success({self.data!r})')

    def expect(self, _message: str) -> T:
        """Return the data, ignoring the message."""
        return self.data

    def inspect(self, f: Callable[[T], Any]) -> Success[T]:
        """Call f with the data for its side effect and return self."""
        f(self.data)
        return self

    def inspect_err(self, _f: Callable[[Any], Any]) -> Success[T]:
        """Return self without calling f."""
        return self

    def match[U](
        self,
        ok: Callable[[T], U] | None = None,
        err: Callable[[Any], U] | None = None,
    ) -> U:
        """Dispatch on the variant.

        Args:
            ok: Handler called with the data.
            err: Handler called with the error of a Failure.

        Returns:
            The value returned by ``ok``.

        Raises:
            InvalidPatternError: If either handler is missing or not callable.
        """
        _check_handlers(ok, err)
        return ok(self.data)  # type: ignore[misc]

    def to_option(self) -> Option[T]:
        """Convert to Option: Some(data), or Nothing when data is None."""
        from fallible.option import from_nullable as option_from_nullable

        return option_from_nullable(self.data)

    def iter(self) -> Iterator[T]:
        """Return an iterator yielding the data once."""
        return iter(self)


class Failure[E](msgspec.Struct, frozen=True, gc=False, tag='failure'):
    """Failure variant of Result containing an error of type E.

    Examples:
        >>> Failure('boom').is_err()
        True
        >>> Failure('boom').unwrap_or(0)
        0
    """

    error: E

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def is_ok(self) -> TypeIs[Success[Any]]:
        """Return False since this is Failure."""
        return False

    def is_err(self) -> TypeIs[Failure[E]]:
        """Return True since this is Failure."""
        return True

    def is_ok_and(self, _predicate: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_err_and(self, predicate: Callable[[E], bool]) -> bool:
        """Return the predicate applied to the error."""
        return predicate(self.error)

    def map[T, U](self, _f: Callable[[T], U]) -> Failure[E]:
        """Return self unchanged since this is Failure."""
        return self

    def map_error[F](self, f: Callable[[E], F]) -> Failure[F]:
        """Apply a function to the error.

        Args:
            f: Function to apply to the error.

        Returns:
            Failure containing the transformed error.
        """
        return Failure(f(self.error))

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default."""
        return default

    def map_or_else[U](self, err_f: Callable[[E], U], _ok_f: Callable[[Any], U]) -> U:
        """Apply ``err_f`` to the error."""
        return err_f(self.error)

    def flat_map[T, U](self, _f: Callable[[T], Result[U, E]]) -> Failure[E]:
        """Return self without calling f."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Result[U, E]]) -> Failure[E]:
        """Alias of :meth:`flat_map`."""
        return self

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from the error.

        Args:
            f: Function that takes the error and returns a new Result,
                possibly with a different error type.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def and_[U](self, _other: Result[U, E]) -> Failure[E]:
        """Return self since self is Failure."""
        return self

    def or_[T, F](self, other: Result[T, F]) -> Result[T, F]:
        """Return other since self is Failure."""
        return other

    def flatten(self) -> Failure[E]:
        """Return self since there is nothing to flatten."""
        return self

    def contains(self, _value: Any) -> bool:
        """Return False since there is no data."""
        return False

    def contains_err(self, error: Any) -> bool:
        """Return True if the error equals ``error``."""
        return self.error == error

    def unwrap(self) -> NoReturn:
        """Raise since there is no data.

        Raises:
            UnwrapOnFailureError: Always, carrying the error.
        """
        raise UnwrapOnFailureError(self.error)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return the fallback value."""
        return f()

    def unwrap_err(self) -> E:
        """Return the error."""
        return self.error

    def expect(self, message: str) -> NoReturn:
        """Raise with the caller's message and the error.

        Raises:
            ExpectFailedError: Always, with message ``'{message}: {error}'``.
        """
        raise ExpectFailedError(f'{message}: {self.error}')

    def inspect[T](self, _f: Callable[[T], Any]) -> Failure[E]:
        """Return self without calling f."""
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Failure[E]:
        """Call f with the error for its side effect and return self."""
        f(self.error)
        return self

    def match[U](
        self,
        ok: Callable[[Any], U] | None = None,
        err: Callable[[E], U] | None = None,
    ) -> U:
        """Dispatch on the variant.

        Raises:
            InvalidPatternError: If either handler is missing or not callable.
        """
        _check_handlers(ok, err)
        return err(self.error)  # type: ignore[misc]

    def to_option(self) -> Option[Any]:
        """Convert to Option, discarding the error."""
        from fallible.option import Nothing

        return Nothing()

    def iter(self) -> Iterator[Any]:
        """Return an empty iterator."""
        return iter(self)


type Result[T, E = Exception] = Success[T] | Failure[E]


def ok[T](data: T) -> Success[T]:
    """Wrap a success value."""
    return Success(data)


def err[E](error: E) -> Failure[E]:
    """Wrap an error value."""
    return Failure(error)


_UNSET: Any = object()


def from_nullable[T, E](value: T | None, error: E = _UNSET) -> Result[T, E | str]:
    """Turn a nullable value into a Result.

    Only ``None`` counts as missing; ``0``, ``''`` and ``False`` are kept.

    Args:
        value: The possibly-None value.
        error: Error for the missing case. Defaults to the configured
            ``missing_value`` literal (``'missing_value'``).

    Examples:
        >>> from_nullable(None)
        Failure(error='missing_value')
        >>> from_nullable(0)
        Success(data=0)
    """
    if value is not None:
        return Success(value)
    if error is _UNSET:
        return Failure(get_config().missing_value)
    return Failure(error)


def from_tuple[T, E](pair: tuple[T, Any] | tuple[Any, E]) -> Result[T, E | ValidationError]:
    """Build a Result from a Go-style ``(value, error)`` pair.

    ``(value, Nothing())`` is a Success and ``(Nothing(), error)`` a Failure.
    The second slot decides: a ``Nothing`` there means no error.

    Any two-element sequence other than a string is accepted as the pair.

    Returns:
        The Result, or ``Failure(ValidationError)`` when ``pair`` is not a
        two-element sequence.
    """
    from fallible.option import Nothing

    if isinstance(pair, str | bytes | bytearray) or not isinstance(pair, Sequence) or len(pair) != 2:
        return Failure(ValidationError('from_tuple() requires a (value, error) pair'))
    value, error = pair
    if isinstance(error, Nothing):
        return Success(value)
    return Failure(error)


def to_option[T](result: Result[T, Any]) -> Option[T]:
    """Convert a Result to an Option, discarding the error.

    Anything that is not a Result converts to Nothing.
    """
    from fallible.option import Nothing

    if isinstance(result, Success | Failure):
        return result.to_option()
    return Nothing()


def match[T, E, U](
    result: Result[T, E],
    ok: Callable[[T], U] | None = None,
    err: Callable[[E], U] | None = None,
) -> U:
    """Function form of ``result.match(ok=..., err=...)``.

    Raises:
        InvalidPatternError: If ``result`` is not a Result or a handler is
            missing or not callable.
    """
    if not isinstance(result, Success | Failure):
        raise InvalidPatternError('match() requires a Result instance')
    return result.match(ok=ok, err=err)
