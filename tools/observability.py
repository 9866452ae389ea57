"""Structured logging around tool entry points."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from closet_app.logging_config import ensure_correlation_id, log_event

LOGGER = logging.getLogger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _loggable(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.model_dump(exclude_defaults=True) if isinstance(value, BaseModel) else value
        for key, value in kwargs.items()
    }


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log start, completion and failure of a tool call.

    With ``input_model`` the keyword arguments are validated first and only
    the fields the caller actually supplied are forwarded, so callees can
    still tell defaults from explicit values. Invalid input is logged and
    either handed to ``on_validation_error`` or re-raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump(exclude_unset=True)
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "tool_validation_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        errors=exc.errors(include_url=False),
                    )
                    if on_validation_error is not None:
                        return on_validation_error(exc)
                    raise

            log_event(LOGGER, logging.INFO, "tool_call_started", tool=tool_name, arguments=_loggable(kwargs))
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "tool_call_failed",
                    tool=tool_name,
                    duration_ms=_elapsed_ms(start),
                    exc_info=True,
                )
                raise
            log_event(LOGGER, logging.INFO, "tool_call_completed", tool=tool_name, duration_ms=_elapsed_ms(start))
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool"]
