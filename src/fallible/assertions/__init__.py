"""Assertion utilities: safe_assert, assert_result and variant checks."""

from fallible.assertions.safe import (
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
