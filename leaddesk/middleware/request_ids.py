"""Request and correlation ids (raw ASGI middleware).

X-Request-ID names one HTTP exchange; X-Correlation-ID ties together every
exchange a client action triggers and falls back to the request id. Client
values are forwarded only when they are short plain ids, which keeps them
safe to log; anything else is replaced by a fresh UUID. Both are echoed on
the response, and the request id is bound for log records while the request
runs.
"""

import re
import uuid
from typing import Callable

from leaddesk.shared.telemetry.logging import request_id_var

_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def get_header(scope: dict, name: str) -> str | None:
    """First value of header name (case-insensitive) from an ASGI scope."""
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def sanitize_request_id(raw: str | None) -> str:
    value = (raw or "").strip()
    return value if _SAFE_ID.fullmatch(value) else str(uuid.uuid4())


def _echo_header(send: Callable, name: str, value: str) -> Callable:
    header = (name.encode(), value.encode())

    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            message["headers"] = [*message.get("headers", []), header]
        await send(message)

    return send_wrapper


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)
        try:
            await app(scope, receive, _echo_header(send, header_name, request_id))
        finally:
            request_id_var.reset(token)

    return asgi_app


def CorrelationIDMiddleware(app: Callable, header_name: str = "X-Correlation-ID") -> Callable:
    """Must run inside RequestIDMiddleware to fall back to its id."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name)
        state = scope.setdefault("state", {})
        correlation_id = (
            sanitize_request_id(raw) if raw else state.get("request_id") or str(uuid.uuid4())
        )
        state["correlation_id"] = correlation_id
        await app(scope, receive, _echo_header(send, header_name, correlation_id))

    return asgi_app
