"""Span helpers for the search fan-out.

The aggregate runs in a ``traced`` span and each source in a child
``TracedOperation``. A source failure is swallowed by the aggregator, so it is
recorded on the span with set_span_error instead of propagating.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Only these keyword arguments become span attributes. Query text never does:
# it may hold emails or phone numbers.
_SAFE_SPAN_ATTR_KEYS = frozenset({"limit", "filters", "tenant_id", "caller_id", "source"})

_tracer = trace.get_tracer("leaddesk.search")


def _mark_error(span: trace.Span, exc: BaseException) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(
    operation_name: str | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Run a coroutine function inside a span named operation_name (default module.qualname)."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(span_name) as span:
                for key, value in kwargs.items():
                    if key.lower() in _SAFE_SPAN_ATTR_KEYS:
                        span.set_attribute(f"arg.{key}", str(value))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _mark_error(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def set_span_error(exception: BaseException) -> None:
    """Mark the current span failed without re-raising."""
    span = trace.get_current_span()
    if span.is_recording():
        _mark_error(span, exception)


def get_trace_id() -> str | None:
    """Current trace id as 32 hex chars, or None outside a sampled span."""
    ctx = trace.get_current_span().get_span_context()
    return format(ctx.trace_id, "032x") if ctx.is_valid else None


class TracedOperation:
    """``with TracedOperation(name, attrs):`` runs the block in a current child span."""

    def __init__(self, operation_name: str, attributes: dict[str, Any] | None = None) -> None:
        self.operation_name = operation_name
        self.attributes = attributes or {}
        self._cm: Any = None
        self.span: trace.Span | None = None

    def __enter__(self) -> "TracedOperation":
        self._cm = _tracer.start_as_current_span(self.operation_name)
        self.span = self._cm.__enter__()
        for key, value in self.attributes.items():
            self.span.set_attribute(key, value)
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self.span is not None and exc_val is not None:
            _mark_error(self.span, exc_val)
        self._cm.__exit__(exc_type, exc_val, exc_tb)
