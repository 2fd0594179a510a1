"""Initial schema: company, app_user, lead, agent, call, recent_search, search_analytics

Revision ID: 3f1c2a9b7d01
Revises:
Create Date: 2026-03-02 10:14:51.402117

Substring search uses ILIKE '%term%'; pg_trgm GIN indexes keep it off
sequential scans. Tenant-scoped tables get RLS policies keyed on
app.current_tenant_id. Rows are hidden when it is unset, unless the session
set app.bypass_rls (caller lookup and cross-tenant callers). Migrations run
as the table owner, which RLS does not restrict.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_RLS_TABLES = ("app_user", "lead", "agent", "call")
_TENANT_MATCH = (
    "current_setting('app.bypass_rls', true) = 'on' "
    "OR tenant_id = current_setting('app.current_tenant_id', true)"
)

_TRGM_INDEXES = (
    ("ix_lead_name_trgm", "lead", "name"),
    ("ix_lead_email_trgm", "lead", "email"),
    ("ix_lead_mobile_trgm", "lead", "mobile"),
    ("ix_app_user_name_trgm", "app_user", "name"),
    ("ix_app_user_email_trgm", "app_user", "email"),
    ("ix_agent_name_trgm", "agent", "name"),
    ("ix_call_summary_trgm", "call", "summary"),
    ("ix_call_transcript_trgm", "call", "transcript"),
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _tenant_fk() -> sa.Column:
    return sa.Column(
        "tenant_id",
        sa.String(),
        sa.ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """Create search schema, trigram indexes and RLS policies."""
    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")

    op.create_table(
        "company",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False, server_default="agent"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "email", name="uq_app_user_tenant_email"),
        sa.CheckConstraint(
            "role IN ('agent', 'manager', 'admin', 'super_admin')",
            name="app_user_role_check",
        ),
    )
    op.create_index("ix_app_user_tenant_id", "app_user", ["tenant_id"])
    op.create_index("ix_app_user_email", "app_user", ["email"])

    op.create_table(
        "lead",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("mobile", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="new"),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_lead_tenant_id", "lead", ["tenant_id"])
    op.create_index("ix_lead_name", "lead", ["name"])
    op.create_index("ix_lead_email", "lead", ["email"])
    op.create_index("ix_lead_mobile", "lead", ["mobile"])
    op.create_index("ix_lead_tenant_created", "lead", ["tenant_id", sa.text("created_at DESC")])

    op.create_table(
        "agent",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("voice", sa.String(), nullable=False),
        sa.Column("tone", sa.String(), nullable=True),
        sa.Column("personality", sa.Text(), nullable=True),
        sa.Column("greeting", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_agent_tenant_id", "agent", ["tenant_id"])
    op.create_index("ix_agent_name", "agent", ["name"])

    op.create_table(
        "call",
        sa.Column("id", sa.String(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "lead_id",
            sa.String(),
            sa.ForeignKey("lead.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("transcript", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_call_tenant_id", "call", ["tenant_id"])
    op.create_index("ix_call_lead_id", "call", ["lead_id"])

    op.create_table(
        "recent_search",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "query", name="uq_recent_search_user_query"),
    )
    op.create_index("ix_recent_search_user_id", "recent_search", ["user_id"])
    op.create_index("ix_recent_search_created_at", "recent_search", ["created_at"])

    op.create_table(
        "search_analytics",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "company_id",
            sa.String(),
            sa.ForeignKey("company.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column("result_type", sa.String(), nullable=True),
        sa.Column("result_id", sa.String(), nullable=True),
        sa.Column("results_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_to_click_ms", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_search_analytics_user_id", "search_analytics", ["user_id"])
    op.create_index("ix_search_analytics_query", "search_analytics", ["query"])

    for name, table, column in _TRGM_INDEXES:
        op.execute(
            f'CREATE INDEX {name} ON "{table}" USING gin ({column} gin_trgm_ops)'
        )

    for table in _RLS_TABLES:
        op.execute(f'ALTER TABLE "{table}" ENABLE ROW LEVEL SECURITY')
        op.execute(
            f'CREATE POLICY tenant_isolation ON "{table}" '
            f"USING ({_TENANT_MATCH}) WITH CHECK ({_TENANT_MATCH})"
        )


def downgrade() -> None:
    """Drop search schema."""
    for table in _RLS_TABLES:
        op.execute(f'DROP POLICY IF EXISTS tenant_isolation ON "{table}"')
        op.execute(f'ALTER TABLE "{table}" DISABLE ROW LEVEL SECURITY')
    for name, _table, _column in _TRGM_INDEXES:
        op.execute(f"DROP INDEX IF EXISTS {name}")
    op.drop_table("search_analytics")
    op.drop_table("recent_search")
    op.drop_table("call")
    op.drop_table("agent")
    op.drop_table("lead")
    op.drop_table("app_user")
    op.drop_table("company")
