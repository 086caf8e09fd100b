"""Option type: Some[T] | Nothing for optional values.

Example:
    ```python
    from fallible.option import from_nullable, some

    port = from_nullable(env.get('PORT')).map(int).unwrap_or(8080)

    some(21).filter(lambda x: x > 0).map(lambda x: x * 2)  # Some(value=42)
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from fallible.errors import (
    ConstructionError,
    ExpectFailedError,
    InvalidPatternError,
    UnwrapOnNoneError,
)

if TYPE_CHECKING:
    from fallible.result import Failure, Result, Success

__all__ = [
    'Nothing',
    'Option',
    'Some',
    'from_nullable',
    'from_result',
    'none',
    'some',
    'to_result',
]

_PATTERN_MESSAGE = 'Invalid pattern object: both some and none handlers must be functions'


def _check_handlers(some: Any, none: Any) -> None:
    if not callable(some) or not callable(none):
        raise InvalidPatternError(_PATTERN_MESSAGE)


class Some[T](msgspec.Struct, frozen=True, gc=False, tag='some'):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. The value is never ``None``:
    normalize nullable inputs with :func:`from_nullable` instead.

    Examples:
        >>> Some(42).unwrap()
        42
        >>> Some(42).map(lambda x: x * 2)
        Some(value=84)
        >>> Some(None)
        Traceback (most recent call last):
        ...
        fallible.errors.ConstructionError: Some cannot hold None; use Nothing()
    """

    value: T

    def __post_init__(self) -> None:
        if self.value is None:
            raise ConstructionError('Some cannot hold None; use Nothing()')

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some."""
        return True

    def is_none(self) -> TypeIs[Nothing]:
        """Return False since this is Some."""
        return False

    def is_some_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return the predicate applied to the contained value."""
        return predicate(self.value)

    def is_none_or(self, predicate: Callable[[T], bool]) -> bool:
        """Return the predicate applied to the contained value."""
        return predicate(self.value)

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Exceptions raised by ``f`` propagate to the caller.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply a function to the contained value, ignoring the default."""
        return f(self.value)

    def flat_map[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Apply a function that returns an Option to the contained value.

        Also known as bind. ``and_then`` is an alias.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Alias of :meth:`flat_map`."""
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing()

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return other since self is Some."""
        return other

    def or_(self, _other: Option[T]) -> Some[T]:
        """Return self since self is Some."""
        return self

    def or_else(self, _f: Callable[[], Option[T]]) -> Some[T]:
        """Return self without calling the fallback."""
        return self

    def xor(self, other: Option[T]) -> Option[T]:
        """Return self if other is Nothing, else Nothing."""
        if isinstance(other, Nothing):
            return self
        return Nothing()

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Pair this value with the value of other.

        Returns:
            Some((self.value, other.value)) if other is Some, else Nothing.
        """
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing()

    def flatten[U](self: Some[Option[U]]) -> Option[U]:
        """Flatten a nested Option.

        Converts Option[Option[U]] into Option[U].

        A Some whose value is not an Option is returned unchanged.
        """
        if isinstance(self.value, Some | Nothing):
            return self.value
        return self  # type: ignore[return-value]

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, _default: T) -> T:
        """Return the contained value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained value without calling the fallback."""
        return self.value

    def expect(self, _message: str) -> T:
        """Return the contained value, ignoring the message."""
        return self.value

    def inspect(self, f: Callable[[T], Any]) -> Some[T]:
        """Call f with the value for its side effect and return self."""
        f(self.value)
        return self

    def tap(self, f: Callable[[T], Any]) -> Some[T]:
        """Alias of :meth:`inspect`."""
        f(self.value)
        return self

    def contains(self, value: Any) -> bool:
        """Return True if the contained value equals ``value``."""
        return self.value == value

    def fold[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Apply f to the contained value, ignoring the default."""
        return f(self.value)

    def ok_or[E](self, _error: E) -> Success[T]:
        """Convert to Result, returning Success(value)."""
        from fallible.result import Success

        return Success(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Success[T]:
        """Convert to Result without calling the error factory."""
        from fallible.result import Success

        return Success(self.value)

    def match[U](
        self,
        some: Callable[[T], U] | None = None,
        none: Callable[[], U] | None = None,
    ) -> U:
        """Dispatch on the variant.

        Args:
            some: Handler called with the contained value.
            none: Handler called with no arguments for Nothing.

        Returns:
            The value returned by ``some``.

        Raises:
            InvalidPatternError: If either handler is missing or not callable.
        """
        _check_handlers(some, none)
        return some(self.value)  # type: ignore[misc]

    def iter(self) -> Iterator[T]:
        """Return an iterator yielding the contained value once."""
        return iter(self)


class Nothing(msgspec.Struct, frozen=True, gc=False, tag='nothing'):
    """Nothing variant of Option representing absence of a value.

    Every ``Nothing()`` is equal to (and hashes like) every other, so code
    compares with ``==`` or checks ``is_none()`` rather than identity.

    Examples:
        >>> Nothing().is_none()
        True
        >>> Nothing().unwrap_or(0)
        0
    """

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[Nothing]:
        """Return True since this is Nothing."""
        return True

    def is_some_and(self, _predicate: Callable[[Any], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_none_or(self, _predicate: Callable[[Any], bool]) -> bool:
        """Return True without calling the predicate."""
        return True

    def map[T, U](self, _f: Callable[[T], U]) -> Nothing:
        """Return self since there is no value to map."""
        return self

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default."""
        return default

    def flat_map[T, U](self, _f: Callable[[T], Option[U]]) -> Nothing:
        """Return self since there is no value to bind."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Option[U]]) -> Nothing:
        """Alias of :meth:`flat_map`."""
        return self

    def filter[T](self, _predicate: Callable[[T], bool]) -> Nothing:
        """Return self since there is no value to filter."""
        return self

    def and_[U](self, _other: Option[U]) -> Nothing:
        """Return self since self is Nothing."""
        return self

    def or_[T](self, other: Option[T]) -> Option[T]:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Option[T]]) -> Option[T]:
        """Return the Option produced by the fallback."""
        return f()

    def xor[T](self, other: Option[T]) -> Option[T]:
        """Return other if it is Some, else self."""
        if isinstance(other, Some):
            return other
        return self

    def zip[U](self, _other: Option[U]) -> Nothing:
        """Return self since self is Nothing."""
        return self

    def flatten(self) -> Nothing:
        """Return self since there is nothing to flatten."""
        return self

    def unwrap(self) -> NoReturn:
        """Raise since there is no value.

        Raises:
            UnwrapOnNoneError: Always.
        """
        raise UnwrapOnNoneError

    def unwrap_or[T](self, default: T) -> T:
        """Return the default."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return the fallback value."""
        return f()

    def expect(self, message: str) -> NoReturn:
        """Raise with the caller's message.

        Raises:
            ExpectFailedError: Always, carrying exactly ``message``.
        """
        raise ExpectFailedError(message)

    def inspect[T](self, _f: Callable[[T], Any]) -> Nothing:
        """Return self without calling f."""
        return self

    def tap[T](self, _f: Callable[[T], Any]) -> Nothing:
        """Alias of :meth:`inspect`."""
        return self

    def contains(self, _value: Any) -> bool:
        """Return False since there is no value."""
        return False

    def fold[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default."""
        return default

    def ok_or[E](self, error: E) -> Failure[E]:
        """Convert to Result, returning Failure(error)."""
        from fallible.result import Failure

        return Failure(error)

    def ok_or_else[E](self, f: Callable[[], E]) -> Failure[E]:
        """Convert to Result, computing the error with f."""
        from fallible.result import Failure

        return Failure(f())

    def match[U](
        self,
        some: Callable[[Any], U] | None = None,
        none: Callable[[], U] | None = None,
    ) -> U:
        """Dispatch on the variant.

        Raises:
            InvalidPatternError: If either handler is missing or not callable.
        """
        _check_handlers(some, none)
        return none()  # type: ignore[misc]

    def iter(self) -> Iterator[Any]:
        """Return an empty iterator."""
        return iter(self)


type Option[T] = Some[T] | Nothing


def some[T](value: T) -> Some[T]:
    """Wrap a present value.

    Raises:
        ConstructionError: If value is None.
    """
    return Some(value)


def none() -> Nothing:
    """Return a fresh Nothing."""
    return Nothing()


def from_nullable[T](value: T | None) -> Option[T]:
    """Normalize a nullable value.

    Only ``None`` is treated as absent; falsy values such as ``0``, ``''``
    and ``False`` become Some.

    Examples:
        >>> from_nullable(None)
        Nothing()
        >>> from_nullable(0)
        Some(value=0)
    """
    if value is None:
        return Nothing()
    return Some(value)


def from_result[T](result: Result[T, Any]) -> Option[T]:
    """Convert a Result to an Option, discarding the error.

    ``Success(None)`` maps to Nothing since Some cannot hold None.
    """
    from fallible.result import Success

    if isinstance(result, Success):
        return from_nullable(result.data)
    return Nothing()


def to_result[T, E](option: Option[T], error: E) -> Result[T, E]:
    """Convert an Option to a Result, using ``error`` for Nothing."""
    return option.ok_or(error)
