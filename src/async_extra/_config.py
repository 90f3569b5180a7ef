"""Library configuration: Config, environment detection and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from async_extra._logging import configure_logging

__all__ = [
    'Config',
    'get_config',
    'init',
    'reset',
]

_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})
_LEVELS = frozenset({'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'})


@dataclass(frozen=True)
class Config:
    """Configuration for async-extra.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_output: Render log events as JSON instead of console output.
        concurrency_limit: Default bound on concurrently running elements in
            ``traverse_concurrent``/``sequence_concurrent``. None = unbounded.
    """

    log_level: str | None = None
    json_output: bool = True
    concurrency_limit: int | None = None


# Active configuration (set by init())
_config: Config | None = None


def _detect_log_level() -> str | None:
    """Read ASYNC_EXTRA_LOG_LEVEL, ignoring unknown levels."""
    env_level = os.environ.get('ASYNC_EXTRA_LOG_LEVEL', '').strip().upper()
    if not env_level:
        return None
    if env_level not in _LEVELS:
        logging.warning("Unknown ASYNC_EXTRA_LOG_LEVEL value '%s', logging disabled", env_level)
        return None
    return env_level


def _detect_json_output() -> bool:
    """Read ASYNC_EXTRA_LOG_JSON, defaulting to JSON output."""
    env_json = os.environ.get('ASYNC_EXTRA_LOG_JSON', '').strip().lower()
    if env_json in _FALSE_VALUES:
        return False
    if env_json and env_json not in _TRUE_VALUES:
        logging.warning("Unknown ASYNC_EXTRA_LOG_JSON value '%s', defaulting to JSON", env_json)
    return True


def _detect_concurrency_limit() -> int | None:
    """Read ASYNC_EXTRA_CONCURRENCY_LIMIT as a positive integer."""
    env_limit = os.environ.get('ASYNC_EXTRA_CONCURRENCY_LIMIT', '').strip()
    if not env_limit:
        return None
    try:
        limit = int(env_limit)
    except ValueError:
        logging.warning("Invalid ASYNC_EXTRA_CONCURRENCY_LIMIT value '%s', ignoring", env_limit)
        return None
    if limit < 1:
        logging.warning('ASYNC_EXTRA_CONCURRENCY_LIMIT must be positive, got %d; ignoring', limit)
        return None
    return limit


def init(
    log_level: str | None = None,
    *,
    json_output: bool | None = None,
    concurrency_limit: int | None = None,
) -> Config:
    """Initialize async-extra with the given configuration.

    Arguments left as None are resolved from the environment. When a log
    level results, logging is configured and the root logger's handlers
    are replaced.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = detect.
        json_output: JSON (True) or console (False) log rendering. None = detect.
        concurrency_limit: Default fan-out bound. None = detect.

    Returns:
        The Config that was set.

    Raises:
        ValueError: If concurrency_limit is not positive.

    Example:
        ```python
        from async_extra import init

        init(log_level='DEBUG', concurrency_limit=8)
        ```
    """
    global _config  # noqa: PLW0603

    if concurrency_limit is not None and concurrency_limit < 1:
        msg = f'concurrency_limit must be positive, got {concurrency_limit}'
        raise ValueError(msg)

    _config = Config(
        log_level=log_level.upper() if log_level is not None else _detect_log_level(),
        json_output=json_output if json_output is not None else _detect_json_output(),
        concurrency_limit=(
            concurrency_limit if concurrency_limit is not None else _detect_concurrency_limit()
        ),
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_output)

    return _config


def get_config() -> Config:
    """Get the active configuration.

    When init() has not been called, the configuration is detected from the
    environment on first use, so the library works without explicit setup.
    That path never calls configure_logging(): only init() touches the root
    logger's handlers.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = Config(
            log_level=_detect_log_level(),
            json_output=_detect_json_output(),
            concurrency_limit=_detect_concurrency_limit(),
        )
    return _config


def reset() -> None:
    """Forget the active configuration; the next get_config() re-detects it."""
    global _config  # noqa: PLW0603
    _config = None
