#!/usr/bin/env python3

"""Logging helpers shared by the model, front end and emitters."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Decorator that logs start, duration and failure of a call at DEBUG level.

    Failures are logged at ERROR level and re-raised unchanged.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        func_name = func.__qualname__

        logger.debug(f"Starting {func_name}")
        start_time = perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = perf_counter() - start_time
            logger.error(f"Failed {func_name} after {elapsed * 1000:.1f}ms: {e}")
            raise

        elapsed = perf_counter() - start_time
        logger.debug(f"Completed {func_name} in {elapsed * 1000:.1f}ms")
        return result

    return cast("F", wrapper)
