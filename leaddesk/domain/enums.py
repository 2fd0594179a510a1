"""Domain enumerations for LeadDesk search.

Enums represent fixed sets of domain values (result types, query intents,
staff roles).
"""

from enum import Enum


class ResultType(str, Enum):
    """Type tag carried by every search result (closed set)."""

    LEAD = "lead"
    USER = "user"
    AGENT = "agent"
    CALL = "call"
    SETTING = "setting"
    NAVIGATION = "navigation"

    @property
    def filter_key(self) -> str:
        """Request filter name that selects this result type (e.g. 'leads')."""
        return _FILTER_KEYS[self]

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid type tags as strings."""
        return [t.value for t in cls]


_FILTER_KEYS: dict[ResultType, str] = {
    ResultType.LEAD: "leads",
    ResultType.USER: "users",
    ResultType.AGENT: "agents",
    ResultType.CALL: "calls",
    ResultType.SETTING: "settings",
    ResultType.NAVIGATION: "navigation",
}

SEARCH_FILTERS: frozenset[str] = frozenset(_FILTER_KEYS.values())


class SearchIntent(str, Enum):
    """Heuristic classification of a query's shape."""

    EMAIL = "email"
    PHONE = "phone"
    ID = "id"
    URL = "url"
    TEXT = "text"


class UserRole(str, Enum):
    """Staff account role within a company (tenant)."""

    AGENT = "agent"
    MANAGER = "manager"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def is_privileged(self) -> bool:
        """Admins see staff accounts; super admins also see other tenants."""
        return self in (UserRole.ADMIN, UserRole.SUPER_ADMIN)

    @property
    def is_cross_tenant(self) -> bool:
        return self is UserRole.SUPER_ADMIN

    @classmethod
    def parse(cls, value: str | None) -> "UserRole":
        """Return the role for value; unknown or missing roles map to AGENT (least privilege)."""
        try:
            return cls(value)
        except ValueError:
            return cls.AGENT
