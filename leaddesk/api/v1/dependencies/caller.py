"""Caller identity dependencies: bearer token -> staff account -> CallerContext."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from leaddesk.application.dtos.user import CallerContext
from leaddesk.core.tenant_context import set_rls_bypass, set_tenant_id
from leaddesk.domain.exceptions import AuthenticationException, CallerNotFoundException
from leaddesk.infrastructure.persistence.database import get_unscoped_db
from leaddesk.infrastructure.persistence.repositories import UserRepository
from leaddesk.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_caller_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the `sub` claim of a valid bearer token; 401 otherwise."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    return str(payload["sub"])


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_unscoped_db)],
) -> UserRepository:
    """User repository for the caller lookup (read-only, before any tenant is bound)."""
    return UserRepository(db)


async def get_caller_context(
    caller_id: Annotated[str, Depends(get_caller_id)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> CallerContext:
    """Resolve tenant and role of the caller and bind the tenant for RLS.

    Cross-tenant callers (super_admin) bind no tenant and switch on the RLS
    bypass, so their lead search sees every company.
    """
    user = await user_repo.get_by_id(caller_id)
    if user is None or not user.is_active:
        raise CallerNotFoundException(caller_id)
    caller = CallerContext(caller_id=user.id, tenant_id=user.tenant_id, role=user.role)
    if caller.role.is_cross_tenant:
        set_rls_bypass(True)
    else:
        set_tenant_id(caller.tenant_id)
    return caller
