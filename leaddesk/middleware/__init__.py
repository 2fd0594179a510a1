"""HTTP middleware: timeout, request/correlation ids, tenant context reset.

Registered in leaddesk.main.create_app; the last one added is the outermost.
"""

from leaddesk.middleware.request_ids import CorrelationIDMiddleware, RequestIDMiddleware
from leaddesk.middleware.tenant_context import TenantContextMiddleware
from leaddesk.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TenantContextMiddleware",
    "TimeoutMiddleware",
]
