"""Structured logging for fallible.

Every module logs through :func:`get_logger`, a structlog logger wrapped
around the stdlib logger of the same name. The ``fallible`` logger carries a
NullHandler, so the library prints nothing until the host application
configures logging, either its own way or with :func:`configure_logging`.

Events emitted by the library:

- ``retry_attempt_failed`` (debug): attempt, max_attempts, delay_ms, error
- ``retry_exhausted`` (warning): attempts, error
- ``retry_invalid_options`` (debug): error
- ``timeout_elapsed`` (debug): timeout_ms
- ``awaitable_failed`` (debug): source, error
"""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

_HANDLER_NAME = 'fallible'

_hooks: list[LogHook] = []

logging.getLogger('fallible').addHandler(logging.NullHandler())


def _call_hooks(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor handing a copy of each entry to the registered hooks."""
    for hook in _hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: BLE001, S110
            pass  # Don't let hook failures break logging
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors run for fallible events and for foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _call_hooks,
    ]


def _event_chain() -> list[Any]:
    # Level filtering first so dropped events never reach the hooks.
    return [
        structlog.stdlib.filter_by_level,
        *_pre_chain(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``.

    Events below the stdlib logger's effective level are dropped before any
    processing, so debug calls cost nothing while logging is silent.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_event_chain(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Install a root handler that renders fallible and stdlib records alike.

    Calling it again replaces the handler installed by the previous call;
    handlers added by the application are left alone.

    Args:
        level: Root logging level ("DEBUG", "INFO", "WARNING", ...). Unknown
            names fall back to INFO.
        json_output: Render JSON lines (True) or console output (False).
        stream: Where to write. Defaults to stderr.

    Returns:
        The installed handler.
    """
    output = stream if stream is not None else sys.stderr
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=output.isatty())
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handler = logging.StreamHandler(output)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for previous in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(previous)
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    return handler


# --- Hooks ---


def add_log_hook(hook: LogHook) -> None:
    """Register a callable receiving a copy of every log entry.

    Hooks run in registration order. An exception raised by a hook is
    ignored and the remaining hooks still run.
    """
    _hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister a hook; unknown hooks are ignored."""
    if hook in _hooks:
        _hooks.remove(hook)


def clear_log_hooks() -> None:
    _hooks.clear()
