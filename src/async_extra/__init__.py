"""async-extra: composable asynchronous computations that may fail.

An AsyncResult describes async work that, once awaited, yields Ok(value) or
Err(error). Combinators build bigger AsyncResults out of smaller ones
without running anything; the caller awaits the outermost one.

Flat imports (preferred):
    from async_extra import AsyncResult, Ok, Err, Some, Nothing
    from async_extra import async_result, Pipeline, pipe

Function-first combinators:
    from async_extra import functions as ar
    ar.traverse(f, items); ar.map2(f, a, b); ar.apply(f_result, x_result)

Submodule imports (for organization):
    from async_extra.result import Ok, Err, Result
    from async_extra.deferred import Deferred
    from async_extra.async_ import AsyncResult
"""

# Configuration
from async_extra._config import Config, get_config, init

# Logging
from async_extra._logging import configure_logging, get_logger

# Async
from async_extra.async_ import AsyncResult, functions

# Composition
from async_extra.compose import Pipeline, pipe

# Decorators
from async_extra.decorators import async_result, do_async_result

# Deferred adapter
from async_extra.deferred import Deferred

# Errors
from async_extra.errors import InvalidYieldError, describe_failure

# Option types
from async_extra.option import Nothing, NothingType, Option, Some

# Result types
from async_extra.result import Err, Ok, Result, collect

__all__ = [
    # Async
    'AsyncResult',
    # Configuration
    'Config',
    # Deferred adapter
    'Deferred',
    # Result types
    'Err',
    # Errors
    'InvalidYieldError',
    # Option types
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    # Composition
    'Pipeline',
    'Result',
    'Some',
    # Decorators
    'async_result',
    'collect',
    # Logging
    'configure_logging',
    'describe_failure',
    'do_async_result',
    'functions',
    'get_config',
    'get_logger',
    'init',
    'pipe',
]
