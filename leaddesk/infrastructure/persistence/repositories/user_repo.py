"""Staff account lookup for the caller context."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leaddesk.application.dtos.user import UserResult
from leaddesk.domain.enums import UserRole
from leaddesk.infrastructure.persistence.models import User


class UserRepository:
    """Read-only access to app_user."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: str) -> UserResult | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return UserResult(
            id=user.id,
            tenant_id=user.tenant_id,
            name=user.name,
            email=user.email,
            role=UserRole.parse(user.role),
            is_active=user.is_active,
        )
