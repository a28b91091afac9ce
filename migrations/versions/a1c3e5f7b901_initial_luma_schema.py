"""initial_luma_schema

Create profiles, user_roles, course_requests, email_templates,
project_groups and project_group_members.

Revision ID: a1c3e5f7b901
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect as sa_inspect


# revision identifiers, used by Alembic.
revision = "a1c3e5f7b901"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing_tables = set(sa_inspect(bind).get_table_names())

    if "profiles" not in existing_tables:
        op.create_table(
            "profiles",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("user_id", sa.String(length=64), nullable=True),
            sa.Column("employee_id", sa.String(length=30), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("employee_role", sa.String(length=50), nullable=False, server_default="Intern"),
            sa.Column("office_location", sa.String(length=50), nullable=False,
                      server_default="Cyber Greens, Gurgaon"),
            sa.Column("manager_id", sa.String(length=36), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["manager_id"], ["profiles.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id"),
            sa.UniqueConstraint("employee_id"),
            sa.UniqueConstraint("email"),
        )
        op.create_index("ix_profiles_manager_id", "profiles", ["manager_id"])

    if "user_roles" not in existing_tables:
        op.create_table(
            "user_roles",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("user_id", sa.String(length=64), nullable=False),
            sa.Column("role", sa.String(length=20), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
        )
        op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])

    if "course_requests" not in existing_tables:
        op.create_table(
            "course_requests",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("requester_id", sa.String(length=36), nullable=False),
            sa.Column("manager_id", sa.String(length=36), nullable=True),
            sa.Column("course_name", sa.String(length=300), nullable=False),
            sa.Column("course_provider", sa.String(length=100), nullable=False),
            sa.Column("course_url", sa.String(length=500), nullable=True),
            sa.Column("estimated_cost", sa.Numeric(10, 2), nullable=True),
            sa.Column("reason", sa.Text(), nullable=True),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
            sa.Column("reviewer_notes", sa.Text(), nullable=True),
            sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("reimbursement_completed", sa.Boolean(), nullable=True),
            sa.Column("proof_of_completion", sa.String(length=500), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["requester_id"], ["profiles.id"]),
            sa.ForeignKeyConstraint(["manager_id"], ["profiles.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_course_requests_manager_status", "course_requests", ["manager_id", "status"])
        op.create_index("ix_course_requests_requester", "course_requests", ["requester_id"])

    if "email_templates" not in existing_tables:
        op.create_table(
            "email_templates",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=150), nullable=False),
            sa.Column("subject", sa.String(length=300), nullable=False),
            sa.Column("body", sa.Text(), nullable=False),
            sa.Column("cc", sa.String(length=500), nullable=True),
            sa.Column("bcc", sa.String(length=500), nullable=True),
            sa.Column("created_by", sa.String(length=64), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name"),
        )

    if "project_groups" not in existing_tables:
        op.create_table(
            "project_groups",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("created_by", sa.String(length=64), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    if "project_group_members" not in existing_tables:
        op.create_table(
            "project_group_members",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("group_id", sa.String(length=36), nullable=False),
            sa.Column("profile_id", sa.String(length=36), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["group_id"], ["project_groups.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("group_id", "profile_id", name="uq_group_member"),
        )
        op.create_index("ix_project_group_members_group_id", "project_group_members", ["group_id"])
        op.create_index("ix_project_group_members_profile_id", "project_group_members", ["profile_id"])


def downgrade():
    op.drop_table("project_group_members")
    op.drop_table("project_groups")
    op.drop_table("email_templates")
    op.drop_table("course_requests")
    op.drop_table("user_roles")
    op.drop_table("profiles")
