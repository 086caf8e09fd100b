"""Adapters from exception-raising code to Result."""

from fallible.decorators.throwable import from_throwable, from_throwable_async, safe_try

__all__ = [
    'from_throwable',
    'from_throwable_async',
    'safe_try',
]
