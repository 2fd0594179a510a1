"""Company (tenant) scope of the current request.

get_caller_context binds the caller's company id here and every database
session opened afterwards runs ``SET LOCAL app.current_tenant_id`` with it,
so row-level security only exposes that company's rows. Cross-tenant callers
(super_admin) bind no tenant and turn on the RLS bypass instead. With neither
set, the policies match no rows. TenantContextMiddleware clears both around
each request.
"""

import re
from contextvars import ContextVar

TENANT_ID_MAX_LENGTH = 64
# Interpolated into SET LOCAL (no bind parameters there), so keep it to id characters.
_TENANT_ID_RE = re.compile(rf"[A-Za-z0-9_-]{{1,{TENANT_ID_MAX_LENGTH}}}")

current_tenant_id: ContextVar[str | None] = ContextVar("current_tenant_id", default=None)
rls_bypass: ContextVar[bool] = ContextVar("rls_bypass", default=False)


def is_valid_tenant_id(value: str | None) -> bool:
    return bool(value) and _TENANT_ID_RE.fullmatch(value) is not None


def set_tenant_id(tenant_id: str | None) -> None:
    """Bind tenant_id for the rest of this context; None unbinds.

    Raises:
        ValueError: If tenant_id is not a plain id (letters, digits, ``_``, ``-``).
    """
    if tenant_id is not None and not is_valid_tenant_id(tenant_id):
        raise ValueError(f"Malformed tenant id (length={len(tenant_id)})")
    current_tenant_id.set(tenant_id)


def get_tenant_id() -> str | None:
    return current_tenant_id.get()


def set_rls_bypass(enabled: bool) -> None:
    """Let sessions of this context see every tenant's rows (cross-tenant callers only)."""
    rls_bypass.set(enabled)


def is_rls_bypassed() -> bool:
    return rls_bypass.get()
