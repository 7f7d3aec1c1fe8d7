"""Initial schema — routing catalog, reports, assignment ledger.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TRIGGERS = ("system", "admin", "retry")
OUTCOMES = (
    "ASSIGNED",
    "UNASSIGNED_NO_MATCHING_AUTHORITY",
    "UNASSIGNED_AUTHORITY_INACTIVE",
    "UNASSIGNED_CONFIGURATION_ERROR",
    "REASSIGNED_BY_ADMIN",
)


def _in(column: str, values: tuple[str, ...]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    # Cities
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("state", sa.String(100), nullable=True),
    )

    # Issue categories
    op.create_table(
        "issue_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("slug", sa.String(100), nullable=True),
    )

    # Authorities
    op.create_table(
        "authorities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("city_id", sa.Integer, sa.ForeignKey("cities.id"), nullable=False),
        sa.Column("region", sa.String(100), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_authorities_city", "authorities", ["city_id"])

    # Authority ↔ category mappings
    op.create_table(
        "authority_categories",
        sa.Column(
            "authority_id",
            sa.Integer,
            sa.ForeignKey("authorities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "issue_category_id",
            sa.Integer,
            sa.ForeignKey("issue_categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index(
        "idx_authority_categories_category", "authority_categories", ["issue_category_id"]
    )

    # Reports
    op.create_table(
        "reports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "issue_category_id",
            sa.Integer,
            sa.ForeignKey("issue_categories.id"),
            nullable=False,
        ),
        sa.Column("city_id", sa.Integer, sa.ForeignKey("cities.id"), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column(
            "authority_id", sa.Integer, sa.ForeignKey("authorities.id"), nullable=True
        ),
        sa.Column("status", sa.String(30), nullable=False, server_default="reported"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_reports_authority", "reports", ["authority_id"])
    op.create_index("idx_reports_city", "reports", ["city_id"])

    # Assignment ledger (append-only)
    op.create_table(
        "assignment_ledger",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("report_id", sa.Integer, sa.ForeignKey("reports.id"), nullable=False),
        sa.Column("actor_id", sa.Integer, nullable=False),
        sa.Column("trigger", sa.String(20), nullable=False),
        sa.Column("outcome", sa.String(50), nullable=False),
        sa.Column("previous_authority_id", sa.Integer, nullable=True),
        sa.Column("new_authority_id", sa.Integer, nullable=True),
        sa.Column("reason", sa.Text, nullable=False),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint(_in("trigger", TRIGGERS), name="ck_assignment_ledger_trigger"),
        sa.CheckConstraint(_in("outcome", OUTCOMES), name="ck_assignment_ledger_outcome"),
    )
    op.create_index(
        "idx_assignment_ledger_report", "assignment_ledger", ["report_id", "id"]
    )


def downgrade() -> None:
    op.drop_table("assignment_ledger")
    op.drop_table("reports")
    op.drop_table("authority_categories")
    op.drop_table("authorities")
    op.drop_table("issue_categories")
    op.drop_table("cities")
