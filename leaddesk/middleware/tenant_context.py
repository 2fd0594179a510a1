"""Tenant context middleware for RLS.

The caller dependency binds the tenant (or the cross-tenant bypass) once the
staff account is resolved; this middleware guarantees every request starts
and ends with neither set.
"""

from typing import Callable

from leaddesk.core.tenant_context import set_rls_bypass, set_tenant_id


def _reset() -> None:
    set_tenant_id(None)
    set_rls_bypass(False)


def TenantContextMiddleware(app: Callable) -> Callable:
    """Clear the tenant context around each HTTP request. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        _reset()
        try:
            await app(scope, receive, send)
        finally:
            _reset()

    return asgi_app
