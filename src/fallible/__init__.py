"""fallible: Result and Option types for Python 3.13+.

Fallibility and optionality as values: ``Success``/``Failure`` for the outcome
of an operation, ``Some``/``Nothing`` for presence or absence, with
combinators to transform, chain, recover and convert between them.

Flat imports (preferred):
    from fallible import Result, Success, Failure, ok, err
    from fallible import Option, Some, Nothing, some, none
    from fallible import safe_try, from_throwable, try_catch, retry, with_timeout

Submodule imports (for organization):
    from fallible import option, result, batch
    option.from_nullable(x)
    result.from_nullable(x, 'missing')
    batch.partition(results)
"""

from fallible import batch, option, result

# Configuration
from fallible._config import FallibleConfig, RetryPolicy, get_config, init

# Logging
from fallible._logging import add_log_hook, clear_log_hooks, configure_logging, remove_log_hook

# Assertions
from fallible.assertions import (
    assert_is_defined,
    assert_is_err,
    assert_is_none,
    assert_is_ok,
    assert_is_some,
    assert_result,
    is_option,
    is_result,
    safe_assert,
)

# Async
from fallible.async_ import from_awaitable, retry, try_catch, with_timeout

# Batch
from fallible.batch import (
    Partition,
    all_,
    all_settled,
    chain,
    collect,
    combine,
    combine_with_all_errors,
    partition,
    unless,
    validate,
    when,
)

# Adapters
from fallible.decorators import from_throwable, from_throwable_async, safe_try

# Errors
from fallible.errors import (
    ConstructionError,
    ExpectFailedError,
    FallibleError,
    InvalidPatternError,
    PreconditionError,
    RetryExhausted,
    RetryExhaustedError,
    UnwrapOnFailureError,
    UnwrapOnNoneError,
    ValidationError,
)

# Option types
from fallible.option import Nothing, Option, Some, none, some

# Result types
from fallible.result import Failure, Result, Success, err, from_tuple, ok, to_option

__all__ = [
    # Errors
    'ConstructionError',
    'ExpectFailedError',
    # Result types
    'Failure',
    # Configuration
    'FallibleConfig',
    'FallibleError',
    'InvalidPatternError',
    # Option types
    'Nothing',
    'Option',
    # Batch
    'Partition',
    'PreconditionError',
    'Result',
    'RetryExhausted',
    'RetryExhaustedError',
    'RetryPolicy',
    'Some',
    'Success',
    'UnwrapOnFailureError',
    'UnwrapOnNoneError',
    'ValidationError',
    # Logging
    'add_log_hook',
    'all_',
    'all_settled',
    # Assertions
    'assert_is_defined',
    'assert_is_err',
    'assert_is_none',
    'assert_is_ok',
    'assert_is_some',
    'assert_result',
    'batch',
    'chain',
    'clear_log_hooks',
    'collect',
    'combine',
    'combine_with_all_errors',
    'configure_logging',
    'err',
    # Async
    'from_awaitable',
    # Adapters
    'from_throwable',
    'from_throwable_async',
    'from_tuple',
    'get_config',
    'init',
    'is_option',
    'is_result',
    'none',
    'ok',
    'option',
    'partition',
    'remove_log_hook',
    'result',
    'retry',
    'safe_assert',
    'safe_try',
    'some',
    'to_option',
    'try_catch',
    'unless',
    'validate',
    'when',
    'with_timeout',
]
