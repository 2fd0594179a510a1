"""ORM entities; importing this package registers every table on Base.metadata."""

from leaddesk.infrastructure.persistence.models.agent import Agent
from leaddesk.infrastructure.persistence.models.call import Call
from leaddesk.infrastructure.persistence.models.company import Company
from leaddesk.infrastructure.persistence.models.lead import Lead
from leaddesk.infrastructure.persistence.models.mixins import CompanyScopedModel, new_id
from leaddesk.infrastructure.persistence.models.search import RecentSearch, SearchAnalytics
from leaddesk.infrastructure.persistence.models.user import User

__all__ = [
    "Agent",
    "Call",
    "Company",
    "CompanyScopedModel",
    "Lead",
    "RecentSearch",
    "SearchAnalytics",
    "User",
    "new_id",
]
