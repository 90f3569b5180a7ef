"""Structured logging for async-extra.

structlog events (such as ``foreign_failure_captured`` from the conversion
boundary) and records from plain ``logging`` loggers go through one
``ProcessorFormatter``, so both come out as JSON or as console lines from
the same renderer. Hooks see every event dict and are how tests observe
boundary captures.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    LogHook = Callable[[dict[str, Any]], None]

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

_hooks: list[LogHook] = []


def add_log_hook(hook: LogHook) -> None:
    """Call ``hook`` with a copy of every event dict from now on."""
    _hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister ``hook``; unknown hooks are ignored."""
    with contextlib.suppress(ValueError):
        _hooks.remove(hook)


def clear_log_hooks() -> None:
    _hooks.clear()


def _run_hooks(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in tuple(_hooks):
        # a failing hook must not break logging
        with contextlib.suppress(Exception):
            hook(dict(event_dict))
    return event_dict


def _pre_chain() -> list[Any]:
    """Enrichment applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _run_hooks,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route structlog and stdlib logging to stderr through one renderer.

    Replaces the root logger's handlers. Safe to call repeatedly; the last
    call wins.

    Args:
        level: Root level name ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
            Unknown names fall back to INFO.
        json_output: Render JSON lines; otherwise use structlog's console
            renderer, colored when stderr is a terminal.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
