"""Logging helpers.

The package logs through stdlib ``logging`` and never installs handlers;
applications (and the CLI) decide where records go. The decorators mirror the
instrumentation used around the analysis entry points: ``log_operation`` marks
entry/exit at DEBUG and ``log_timing`` flags slow calls.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable


engine_logger = logging.getLogger("real_return_engine")


def log_operation(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            engine_logger.debug("[%s] start", name)
            result = fn(*args, **kwargs)
            engine_logger.debug("[%s] done", name)
            return result

        return wrapper

    return deco


def log_timing(threshold: float = 0.0) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - started
                if elapsed > threshold:
                    engine_logger.warning("slow_call: %s took %.3fs", fn.__qualname__, elapsed)

        return wrapper

    return deco


def log_portfolio_operation(event: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    if details:
        engine_logger.info("[%s] %s", event, details)
    else:
        engine_logger.info("[%s]", event)
    return {"event": event, "details": details or {}}
