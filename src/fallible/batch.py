"""Batch and conditional utilities built on Result.

Fail-fast collection (``all_``/``combine``, ``collect``), fail-slow
aggregation (``combine_with_all_errors``, ``partition``, ``all_settled``),
eager conditionals (``when``, ``unless``, ``validate``) and step
composition (``chain``).

Inputs are iterated synchronously, in order; none of these start
concurrent work.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import msgspec

from fallible.assertions import is_result, safe_assert
from fallible.errors import ValidationError
from fallible.result import Failure, Result, Success

__all__ = [
    'Partition',
    'all_',
    'all_settled',
    'chain',
    'collect',
    'combine',
    'combine_with_all_errors',
    'partition',
    'unless',
    'validate',
    'when',
]


class Partition[S, F](msgspec.Struct, frozen=True):
    """Results split by variant, relative order preserved in each bucket."""

    successes: list[S]
    failures: list[F]


def _materialize(results: Any) -> list[Any] | tuple[Any, ...] | None:
    """Return results as a list/tuple, or None if it is not a collection of items."""
    if isinstance(results, list | tuple):
        return results
    if isinstance(results, str | bytes | bytearray | Mapping) or not isinstance(results, Iterable):
        return None
    return list(results)


def _fail_fast(results: Any, name: str) -> Result[list[Any], Any]:
    items = _materialize(results)
    if items is None:
        return Failure(ValidationError(f'{name}() requires a sequence of Results'))

    values: list[Any] = []
    for result in items:
        if not is_result(result):
            return Failure(ValidationError(f'{name}() requires a sequence containing only Result instances'))
        if isinstance(result, Failure):
            return result
        values.append(result.data)
    return Success(values)


def all_(results: Iterable[Result[Any, Any]]) -> Result[Any, Any]:
    """Combine Results into one, failing fast.

    Args:
        results: Results in any order of types (a heterogeneous tuple is fine).

    Returns:
        The first Failure in input order, or Success of every value in input
        order. A tuple input gives a tuple, anything else a list.
        ``Failure(ValidationError)`` if results is not a sequence of Results.

    Examples:
        >>> all_([Success(1), Success('a')])
        Success(data=[1, 'a'])
        >>> all_([Success(1), Failure('x'), Success(3)])
        Failure(error='x')
    """
    combined = _fail_fast(results, 'all_')
    if isinstance(results, tuple) and isinstance(combined, Success):
        return Success(tuple(combined.data))
    return combined


combine = all_


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect homogeneous Results into a Result of list, failing fast.

    Examples:
        >>> collect([Success(1), Success(2), Success(3)])
        Success(data=[1, 2, 3])
    """
    return _fail_fast(results, 'collect')


def combine_with_all_errors(results: Iterable[Result[Any, Any]]) -> Result[list[Any], list[Any]]:
    """Like all_() but gathers every error instead of stopping at the first.

    Malformed elements contribute a ValidationError each.

    Examples:
        >>> combine_with_all_errors([Success(1), Failure('a'), Failure('b')])
        Failure(error=['a', 'b'])
    """
    items = _materialize(results)
    if items is None:
        return Failure([ValidationError('combine_with_all_errors() requires a sequence of Results')])

    values: list[Any] = []
    errors: list[Any] = []
    for result in items:
        if not is_result(result):
            errors.append(
                ValidationError('combine_with_all_errors() requires a sequence containing only Result instances')
            )
        elif isinstance(result, Failure):
            errors.append(result.unwrap_err())
        else:
            values.append(result.data)

    if errors:
        return Failure(errors)
    return Success(values)


def _split(results: Any, name: str) -> tuple[list[Success[Any]], list[Failure[Any]]]:
    items = _materialize(results)
    safe_assert(items is not None, f'{name}() requires a sequence of Results', error=ValidationError)

    successes: list[Success[Any]] = []
    failures: list[Failure[Any]] = []
    for result in items:  # type: ignore[union-attr]
        if isinstance(result, Success):
            successes.append(result)
        elif isinstance(result, Failure):
            failures.append(result)
        else:
            raise ValidationError(f'{name}() requires a sequence containing only Result instances')
    return successes, failures


def partition[T, E](results: Iterable[Result[T, E]]) -> Partition[T, E]:
    """Split Results into unwrapped success values and errors.

    Never short-circuits.

    Raises:
        ValidationError: If results is not a sequence of Results.

    Examples:
        >>> partition([Success(1), Failure('a'), Success(2)])
        Partition(successes=[1, 2], failures=['a'])
    """
    successes, failures = _split(results, 'partition')
    return Partition([s.data for s in successes], [f.error for f in failures])


def all_settled[T, E](results: Iterable[Result[T, E]]) -> Partition[Success[T], Failure[E]]:
    """Split Results by variant, keeping the Success/Failure wrappers.

    Raises:
        ValidationError: If results is not a sequence of Results.
    """
    successes, failures = _split(results, 'all_settled')
    return Partition(successes, failures)


# --- Conditionals ---


def when[T, E](condition: bool, success: T, error: E) -> Result[T, E]:
    """Return Success(success) if condition holds, else Failure(error)."""
    return Success(success) if condition else Failure(error)


def unless[T, E](condition: bool, success: T, error: E) -> Result[T, E]:
    """Return Success(success) unless condition holds, else Failure(error)."""
    return Success(success) if not condition else Failure(error)


def validate[T, E](value: T, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
    """Return Success(value) if predicate(value) holds, else Failure(error).

    Examples:
        >>> validate(17, lambda age: age >= 18, 'too young')
        Failure(error='too young')
    """
    return Success(value) if predicate(value) else Failure(error)


# --- Composition ---


def chain[T, E](*fns: Callable[[T], Result[T, E]]) -> Callable[[T], Result[T, E]]:
    """Compose same-typed fallible steps left to right.

    The returned function starts from Success(value) and applies each step
    with flat_map, stopping at the first Failure. With no steps it simply
    wraps its argument in Success.

    Raises:
        ValidationError: If any argument is not callable.

    Example:
        ```python
        normalize = chain(strip, non_empty, lowercase)
        normalize('  Hello ')  # Success(data='hello')
        ```
    """
    for i, fn in enumerate(fns):
        safe_assert(callable(fn), f'chain() argument at index {i} must be a function', error=ValidationError)

    def run(value: T) -> Result[T, E]:
        current: Result[T, E] = Success(value)
        for fn in fns:
            current = current.flat_map(fn)
            if isinstance(current, Failure):
                break
        return current

    return run
