"""Logging configuration for the application.

Records carry the request id bound by RequestIDMiddleware and the active
OpenTelemetry trace id (``-`` when absent) so log lines can be joined with
the response headers and with traces from the search fan-out.
"""

import logging
import sys
from contextvars import ContextVar

from leaddesk.core.config import get_settings
from leaddesk.shared.telemetry.tracing import get_trace_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[req=%(request_id)s trace=%(trace_id)s] %(message)s"
)

# Chatty third-party loggers kept at WARNING unless debugging.
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "aiosqlite")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class TraceContextFilter(logging.Filter):
    """Attach request_id and trace_id to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.trace_id = get_trace_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level comes from settings.log_level, else DEBUG when settings.debug is
    True, otherwise INFO. Output goes to stdout.
    """
    settings = get_settings()
    if settings.log_level:
        log_level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO
    else:
        log_level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TraceContextFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])

    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
