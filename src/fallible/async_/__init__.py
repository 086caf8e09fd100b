"""Async utilities: try_catch, from_awaitable, retry and with_timeout.

Examples:
    >>> from fallible.async_ import retry, with_timeout
    >>>
    >>> async def main():
    ...     user = await with_timeout(fetch_user(1), 2000, 'user lookup timed out')
    ...     posts = await retry(lambda: fetch_posts(1), max_attempts=5)
"""

from fallible.async_.adapters import from_awaitable, try_catch
from fallible.async_.retry import retry
from fallible.async_.timeout import with_timeout

__all__ = [
    'from_awaitable',
    'retry',
    'try_catch',
    'with_timeout',
]
