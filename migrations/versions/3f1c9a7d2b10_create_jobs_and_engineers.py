"""create_jobs_and_engineers

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "jobs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("job_number", sa.String(length=50), nullable=False),
        sa.Column("assigned_agency_id", sa.Uuid(), nullable=False),
        sa.Column("client_name", sa.String(length=255), nullable=False),
        sa.Column("client_phone", sa.String(length=20), nullable=False),
        sa.Column("site_latitude", sa.Float(), nullable=False),
        sa.Column("site_longitude", sa.Float(), nullable=False),
        sa.Column("site_address", sa.String(length=500), nullable=False),
        sa.Column("site_city", sa.String(length=100), nullable=True),
        sa.Column("site_state", sa.String(length=100), nullable=True),
        sa.Column("site_postal_code", sa.String(length=20), nullable=True),
        sa.Column("required_skill_level", sa.Integer(), nullable=False),
        sa.Column("scheduled_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("urgency", sa.String(length=20), nullable=False, server_default="normal"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("assigned_engineer_id", sa.Uuid(), nullable=True),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("job_number"),
        sa.CheckConstraint(
            "required_skill_level BETWEEN 1 AND 5", name="ck_jobs_required_skill_level"
        ),
    )
    op.create_index("ix_jobs_assigned_agency_id", "jobs", ["assigned_agency_id"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_assigned_engineer_id", "jobs", ["assigned_engineer_id"])
    op.create_index("ix_jobs_agency_status", "jobs", ["assigned_agency_id", "status"])

    op.create_table(
        "engineers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("agency_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("skill_level", sa.Integer(), nullable=False),
        sa.Column(
            "availability_status",
            sa.String(length=20),
            nullable=False,
            server_default="available",
        ),
        sa.Column("current_latitude", sa.Float(), nullable=True),
        sa.Column("current_longitude", sa.Float(), nullable=True),
        sa.Column("last_location_update", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_jobs_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("average_rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("success_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "skill_level BETWEEN 1 AND 5", name="ck_engineers_skill_level"
        ),
    )
    op.create_index("ix_engineers_agency_id", "engineers", ["agency_id"])
    op.create_index(
        "ix_engineers_availability_status", "engineers", ["availability_status"]
    )
    op.create_index(
        "ix_engineers_agency_availability",
        "engineers",
        ["agency_id", "availability_status"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_engineers_agency_availability", table_name="engineers")
    op.drop_index("ix_engineers_availability_status", table_name="engineers")
    op.drop_index("ix_engineers_agency_id", table_name="engineers")
    op.drop_table("engineers")

    op.drop_index("ix_jobs_agency_status", table_name="jobs")
    op.drop_index("ix_jobs_assigned_engineer_id", table_name="jobs")
    op.drop_index("ix_jobs_status", table_name="jobs")
    op.drop_index("ix_jobs_assigned_agency_id", table_name="jobs")
    op.drop_table("jobs")
