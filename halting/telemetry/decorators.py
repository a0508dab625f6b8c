"""
Tracing decorators for halting analysis.
"""

import functools
import inspect
import time
from typing import Callable, Optional, TypeVar, ParamSpec

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode, SpanKind

from halting.telemetry.config import get_tracer

P = ParamSpec("P")
T = TypeVar("T")


def trace_sync(
    name: Optional[str] = None,
    attributes: Optional[dict] = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for tracing synchronous functions.

    Args:
        name: Span name (defaults to function name)
        attributes: Static attributes to add to the span
        kind: Span kind (INTERNAL, SERVER, CLIENT, etc.)

    Example:
        @trace_sync("halting.run")
        def run(self):
            ...
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        span_name = name or func.__name__
        tracer = get_tracer(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with tracer.start_as_current_span(
                span_name,
                kind=kind,
                attributes=attributes,
            ) as span:
                try:
                    _add_arg_attributes(span, func, args, kwargs)

                    start_time = time.perf_counter()
                    result = func(*args, **kwargs)
                    duration_ms = (time.perf_counter() - start_time) * 1000

                    span.set_attribute("halting.duration_ms", duration_ms)
                    span.set_status(Status(StatusCode.OK))
                    return result

                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        return wrapper
    return decorator


def _add_arg_attributes(span: trace.Span, func: Callable, args: tuple, kwargs: dict) -> None:
    """Add function arguments as span attributes (only simple types)."""
    param_names = list(inspect.signature(func).parameters.keys())

    for param_name, value in zip(param_names, args):
        if param_name == "self":
            continue
        if isinstance(value, (str, int, float, bool)):
            span.set_attribute(f"arg.{param_name}", value)
        elif isinstance(value, (list, tuple)):
            span.set_attribute(f"arg.{param_name}.count", len(value))

    for key, value in kwargs.items():
        if isinstance(value, (str, int, float, bool)):
            span.set_attribute(f"arg.{key}", value)
