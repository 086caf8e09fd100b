"""Tests for Result types: Success and Failure."""

import msgspec
import pytest
from hypothesis import given

from fallible import (
    ExpectFailedError,
    Failure,
    InvalidPatternError,
    Nothing,
    PreconditionError,
    Some,
    Success,
    UnwrapOnFailureError,
    ValidationError,
    err,
    from_tuple,
    init,
    ok,
    result,
    to_option,
)
from tests.strategies import integers, results, texts


class TestSuccessConstruction:
    """Tests for Success construction and basic properties."""

    def test_success_creation(self) -> None:
        """Success can be created with a value."""
        s = Success(42)
        assert s.data == 42

    def test_success_is_ok(self) -> None:
        """Success.is_ok() returns True."""
        assert Success(42).is_ok() is True
        assert Success(42).is_err() is False

    def test_success_may_hold_none(self) -> None:
        """Success(None) is a valid value."""
        assert Success(None).unwrap() is None

    def test_ok_factory(self) -> None:
        """ok() builds a Success."""
        assert ok(1) == Success(1)

    def test_success_equality(self) -> None:
        """Success values with equal data are equal."""
        assert Success(42) == Success(42)
        assert Success(42) != Success(43)

    def test_success_not_equal_to_failure(self) -> None:
        """Success and Failure with the same payload differ."""
        assert Success(42) != Failure(42)

    def test_success_not_equal_to_some(self) -> None:
        """Success and Some are different types."""
        assert Success(42) != Some(42)

    def test_success_repr(self) -> None:
        """Success has a readable repr."""
        assert repr(Success(42)) == 'Success(data=42)'

    def test_success_frozen(self) -> None:
        """Success is immutable."""
        s = Success(42)
        with pytest.raises(AttributeError):
            s.data = 43  # type: ignore[misc]


class TestFailureConstruction:
    """Tests for Failure construction and basic properties."""

    def test_failure_creation(self) -> None:
        """Failure can be created with an error."""
        f = Failure('oops')
        assert f.error == 'oops'

    def test_failure_is_err(self) -> None:
        """Failure.is_err() returns True."""
        assert Failure('e').is_err() is True
        assert Failure('e').is_ok() is False

    def test_err_factory(self) -> None:
        """err() builds a Failure."""
        assert err('e') == Failure('e')

    def test_failure_with_exception(self, sample_failure: Failure[ValueError]) -> None:
        """Failure can carry an exception instance."""
        assert isinstance(sample_failure.error, ValueError)
        assert str(sample_failure.error) == 'test error'

    def test_failure_repr(self) -> None:
        """Failure has a readable repr."""
        assert repr(Failure('x')) == "Failure(error='x')"


class TestPatternMatching:
    """Tests for structural pattern matching and match()."""

    def test_match_statement(self) -> None:
        """match statement binds data and error."""
        for r, expected in ((Success(1), 'ok 1'), (Failure('e'), 'err e')):
            match r:
                case Success(data):
                    got = f'ok {data}'
                case Failure(error):
                    got = f'err {error}'
            assert got == expected

    def test_match_method(self) -> None:
        """match() calls exactly one handler."""
        assert Success(2).match(ok=lambda x: x * 2, err=lambda e: -1) == 4
        assert Failure('e').match(ok=lambda x: x * 2, err=lambda e: f'{e}!') == 'e!'

    def test_match_method_missing_handler(self) -> None:
        """A missing handler raises InvalidPatternError."""
        with pytest.raises(InvalidPatternError, match='both ok and err handlers must be functions'):
            Success(1).match(ok=lambda x: x)

    def test_match_method_non_callable_handler(self) -> None:
        """Handlers are checked even for the branch that is not taken."""
        with pytest.raises(InvalidPatternError):
            Failure('e').match(ok=None, err=lambda e: e)

    def test_match_function(self) -> None:
        """result.match dispatches like the method."""
        assert result.match(Success(1), ok=lambda x: x + 1, err=lambda e: 0) == 2
        assert result.match(Failure('e'), ok=lambda x: x + 1, err=lambda e: 0) == 0

    def test_match_function_rejects_non_result(self) -> None:
        """result.match requires a Result."""
        with pytest.raises(InvalidPatternError, match='requires a Result instance'):
            result.match(42, ok=lambda x: x, err=lambda e: e)  # type: ignore[arg-type]


class TestPredicates:
    """Tests for is_ok_and and is_err_and."""

    def test_is_ok_and(self) -> None:
        """is_ok_and applies the predicate to Success data only."""
        assert Success(5).is_ok_and(lambda x: x > 3) is True
        assert Success(1).is_ok_and(lambda x: x > 3) is False
        assert Failure(5).is_ok_and(lambda x: True) is False

    def test_is_err_and(self) -> None:
        """is_err_and applies the predicate to Failure errors only."""
        assert Failure('bad').is_err_and(lambda e: e == 'bad') is True
        assert Failure('bad').is_err_and(lambda e: e == 'worse') is False
        assert Success('bad').is_err_and(lambda e: True) is False


class TestTransformations:
    """Tests for map, map_error, map_or and map_or_else."""

    def test_map_success(self) -> None:
        """map transforms Success data."""
        assert Success(5).map(lambda x: x * 2) == Success(10)

    def test_map_failure_untouched(self) -> None:
        """map returns the same Failure without calling f."""
        calls: list[int] = []
        f = Failure('e')
        assert f.map(calls.append) is f
        assert calls == []

    def test_map_error(self) -> None:
        """map_error transforms the Failure error only."""
        assert Failure('e').map_error(str.upper) == Failure('E')
        s = Success(1)
        assert s.map_error(str.upper) is s

    def test_map_exception_propagates(self) -> None:
        """Exceptions raised by f propagate out of map."""
        with pytest.raises(ZeroDivisionError):
            Success(1).map(lambda x: x / 0)

    def test_map_or(self) -> None:
        """map_or applies f on Success and returns the default on Failure."""
        assert Success(2).map_or(0, lambda x: x * 3) == 6
        assert Failure('e').map_or(0, lambda x: x * 3) == 0

    def test_map_or_else(self) -> None:
        """map_or_else takes the error handler first, then the success handler."""
        assert Success(2).map_or_else(len, lambda x: x * 3) == 6
        assert Failure('abc').map_or_else(len, lambda x: x * 3) == 3

    @given(integers)
    def test_map_identity(self, value: int) -> None:
        """Mapping the identity function changes nothing."""
        assert Success(value).map(lambda x: x) == Success(value)

    @given(results)
    def test_map_composition(self, r: object) -> None:
        """map(f).map(g) equals map(g . f)."""

        def f(x: int) -> int:
            return x + 1

        def g(x: int) -> int:
            return x * 2

        assert r.map(f).map(g) == r.map(lambda x: g(f(x)))  # type: ignore[attr-defined]


class TestChaining:
    """Tests for flat_map, and_then, or_else, and_ and or_."""

    @staticmethod
    def parse(s: str) -> Success[int] | Failure[str]:
        return Success(int(s)) if s.isdigit() else Failure(f'not a number: {s}')

    def test_flat_map(self) -> None:
        """flat_map chains fallible steps."""
        assert Success('12').flat_map(self.parse) == Success(12)
        assert Success('x').flat_map(self.parse) == Failure('not a number: x')
        assert Failure('e').flat_map(self.parse) == Failure('e')

    def test_and_then_alias(self) -> None:
        """and_then behaves like flat_map."""
        assert Success('7').and_then(self.parse) == Success(7)

    def test_or_else_recovers(self) -> None:
        """or_else maps the error to a new Result."""
        assert Failure('e').or_else(lambda e: Success(f'recovered {e}')) == Success('recovered e')
        assert Failure('e').or_else(lambda e: Failure(len(e))) == Failure(1)

    def test_or_else_not_called_on_success(self) -> None:
        """or_else leaves Success alone."""
        calls: list[object] = []
        s = Success(1)
        assert s.or_else(calls.append) is s
        assert calls == []

    def test_and(self) -> None:
        """and_ returns other when self is Success."""
        assert Success(1).and_(Success('a')) == Success('a')
        assert Success(1).and_(Failure('b')) == Failure('b')
        assert Failure('a').and_(Success(2)) == Failure('a')

    def test_or(self) -> None:
        """or_ returns self when Success, else other."""
        assert Success(1).or_(Success(2)) == Success(1)
        assert Failure('a').or_(Success(2)) == Success(2)
        assert Failure('a').or_(Failure('b')) == Failure('b')

    @given(integers)
    def test_left_identity(self, value: int) -> None:
        """ok(a).flat_map(f) equals f(a)."""

        def f(x: int) -> Success[int]:
            return Success(x * 2)

        assert ok(value).flat_map(f) == f(value)

    @given(results)
    def test_right_identity(self, r: object) -> None:
        """r.flat_map(ok) equals r."""
        assert r.flat_map(ok) == r  # type: ignore[attr-defined]

    @given(results)
    def test_associativity(self, r: object) -> None:
        """r.flat_map(f).flat_map(g) equals r.flat_map(lambda x: f(x).flat_map(g))."""

        def f(x: int) -> Success[int]:
            return Success(x + 1)

        def g(x: int) -> Success[int] | Failure[str]:
            return Success(x * 2) if x % 2 == 0 else Failure('odd')

        assert r.flat_map(f).flat_map(g) == r.flat_map(lambda x: f(x).flat_map(g))  # type: ignore[attr-defined]


class TestFlatten:
    """Tests for Result.flatten."""

    def test_flatten_nested_success(self) -> None:
        """Success(Success(x)) flattens to Success(x)."""
        assert Success(Success(1)).flatten() == Success(1)

    def test_flatten_nested_failure(self) -> None:
        """Success(Failure(e)) flattens to Failure(e)."""
        assert Success(Failure('e')).flatten() == Failure('e')

    def test_flatten_failure(self) -> None:
        """Failure flattens to itself."""
        f = Failure('e')
        assert f.flatten() is f

    def test_flatten_plain_value_unchanged(self, sample_success: Success[int]) -> None:
        """Success of a plain value flattens to itself."""
        assert sample_success.flatten() is sample_success  # type: ignore[misc]


class TestExtraction:
    """Tests for unwrap variants and expect."""

    def test_unwrap_success(self, sample_success: Success[int]) -> None:
        """unwrap returns the data."""
        assert sample_success.unwrap() == 42

    def test_unwrap_failure(self) -> None:
        """unwrap on Failure raises with the error in the message."""
        with pytest.raises(UnwrapOnFailureError, match='Called unwrap on failure: boom') as exc_info:
            Failure('boom').unwrap()
        assert exc_info.value.error == 'boom'

    def test_unwrap_failure_is_runtime_error(self) -> None:
        """The unwrap error is also a RuntimeError."""
        with pytest.raises(RuntimeError):
            Failure('boom').unwrap()

    def test_unwrap_or(self) -> None:
        """unwrap_or returns the default only for Failure."""
        assert Success(1).unwrap_or(0) == 1
        assert Failure('e').unwrap_or(0) == 0

    def test_unwrap_or_else_lazy(self) -> None:
        """unwrap_or_else only calls the fallback for Failure."""
        calls: list[str] = []

        def fallback() -> int:
            calls.append('called')
            return 0

        assert Success(1).unwrap_or_else(fallback) == 1
        assert calls == []
        assert Failure('e').unwrap_or_else(fallback) == 0
        assert calls == ['called']

    def test_unwrap_err(self) -> None:
        """unwrap_err returns the error of a Failure."""
        assert Failure('e').unwrap_err() == 'e'

    def test_unwrap_err_on_success(self) -> None:
        """unwrap_err on Success is a precondition error."""
        with pytest.raises(PreconditionError):
            Success(1).unwrap_err()

    def test_expect_success(self) -> None:
        """expect returns the data."""
        assert Success(1).expect('needed') == 1

    def test_expect_failure(self) -> None:
        """expect on Failure joins the message and the error."""
        with pytest.raises(ExpectFailedError) as exc_info:
            Failure('not found').expect('Failed to load user')
        assert str(exc_info.value) == 'Failed to load user: not found'

    def test_contains(self) -> None:
        """contains and contains_err compare with ==."""
        assert Success(1).contains(1) is True
        assert Success(1).contains(2) is False
        assert Failure('e').contains('e') is False
        assert Failure('e').contains_err('e') is True
        assert Success('e').contains_err('e') is False

    def test_inspect(self) -> None:
        """inspect and inspect_err run side effects on their variant only."""
        seen: list[object] = []
        s = Success(1)
        f = Failure('e')
        assert s.inspect(seen.append) is s
        assert s.inspect_err(seen.append) is s
        assert f.inspect(seen.append) is f
        assert f.inspect_err(seen.append) is f
        assert seen == [1, 'e']

    @given(integers, texts)
    def test_unwrap_or_total(self, value: int, error: str) -> None:
        """unwrap_or never raises."""
        assert Success(value).unwrap_or(0) == value
        assert Failure(error).unwrap_or(0) == 0


class TestIteration:
    """Tests for iterating over Results."""

    def test_iter(self) -> None:
        """Success yields its data once, Failure yields nothing."""
        assert list(Success(1)) == [1]
        assert list(Success(1).iter()) == [1]
        assert list(Failure('e')) == []
        assert list(Failure('e').iter()) == []


class TestConversions:
    """Tests for conversions from and to Result."""

    def test_from_nullable_default_error(self) -> None:
        """None becomes Failure('missing_value') by default."""
        assert result.from_nullable(None) == Failure('missing_value')

    def test_from_nullable_custom_error(self) -> None:
        """An explicit error is used for None."""
        assert result.from_nullable(None, 'no user') == Failure('no user')

    def test_from_nullable_keeps_falsy(self) -> None:
        """Only None counts as missing."""
        assert result.from_nullable(0) == Success(0)
        assert result.from_nullable('') == Success('')
        assert result.from_nullable(False) == Success(False)

    def test_from_nullable_configured_default(self) -> None:
        """The default error comes from the configuration."""
        init(missing_value='absent')
        assert result.from_nullable(None) == Failure('absent')

    def test_from_tuple(self) -> None:
        """The second slot of the pair decides the variant."""
        assert from_tuple((1, Nothing())) == Success(1)
        assert from_tuple((Nothing(), 'e')) == Failure('e')

    def test_from_tuple_accepts_list(self) -> None:
        """A two-element list works like a tuple."""
        assert from_tuple([1, Nothing()]) == Success(1)  # type: ignore[arg-type]
        assert from_tuple([Nothing(), 'e']) == Failure('e')  # type: ignore[arg-type]

    def test_from_tuple_falsy_error_is_failure(self) -> None:
        """Any non-Nothing error slot means failure, even a falsy one."""
        assert from_tuple((1, '')) == Failure('')

    def test_from_tuple_rejects_bad_shape(self) -> None:
        """Anything but a two-element sequence is a validation failure."""
        for bad in ((1,), (1, 2, 3), [1], 'ab', b'ab', 42, None):
            r = from_tuple(bad)  # type: ignore[arg-type]
            assert r.is_err()
            assert isinstance(r.unwrap_err(), ValidationError)

    def test_to_option(self) -> None:
        """to_option keeps data and discards errors."""
        assert Success(1).to_option() == Some(1)
        assert Failure('e').to_option() == Nothing()
        assert Success(None).to_option() == Nothing()

    def test_to_option_function(self) -> None:
        """The function form treats non-Results as Nothing."""
        assert to_option(Success(1)) == Some(1)
        assert to_option(Failure('e')) == Nothing()
        assert to_option('not a result') == Nothing()  # type: ignore[arg-type]


class TestSerialization:
    """Tests for msgspec encoding of Results."""

    def test_encode(self) -> None:
        """Both variants encode as tagged objects."""
        assert msgspec.json.encode(Success(1)) == b'{"type":"success","data":1}'
        assert msgspec.json.encode(Failure('e')) == b'{"type":"failure","error":"e"}'

    def test_decode_tagged_union(self) -> None:
        """Either variant decodes back from the union type."""
        decoded = msgspec.json.decode(b'{"type":"failure","error":"e"}', type=Success | Failure)
        assert decoded == Failure('e')
