"""DTOs for the authenticated caller (no dependency on ORM)."""

from dataclasses import dataclass

from leaddesk.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """Staff account read-model used to build the caller context."""

    id: str
    tenant_id: str
    name: str | None
    email: str
    role: UserRole
    is_active: bool


@dataclass(frozen=True)
class CallerContext:
    """Identity and scope of the caller for one request.

    is_privileged comes from the role (admin, super_admin); tenant_scope is
    None when the caller may see every tenant.
    """

    caller_id: str
    tenant_id: str
    role: UserRole

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged

    @property
    def tenant_scope(self) -> str | None:
        return None if self.role.is_cross_tenant else self.tenant_id
