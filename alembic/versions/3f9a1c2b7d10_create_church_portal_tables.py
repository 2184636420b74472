"""create_church_portal_tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f9a1c2b7d10"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ("admin", "user")
GENDERS = ("male", "female")
MARITAL_STATUSES = ("single", "married", "divorced", "separated")
MINISTRIES = ("Men's", "Women's", "Children's", "Other")
SERVICE_TYPES = ("sunday", "monday", "tuesday", "wednesday", "christmas", "easter")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column(
            "role", sa.Enum(*USER_ROLES, name="user_role_enum"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_auth_sessions_user_id", "auth_sessions", ["user_id"])

    op.create_table(
        "members",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("surname", sa.String(), nullable=False),
        sa.Column("other_names", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("occupation", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.Enum(*GENDERS, name="member_gender_enum"), nullable=True),
        sa.Column(
            "marital_status",
            sa.Enum(*MARITAL_STATUSES, name="member_marital_status_enum"),
            nullable=True,
        ),
        sa.Column("number_of_children", sa.Integer(), nullable=True),
        sa.Column("spouse_name", sa.String(), nullable=True),
        sa.Column("saved_or_not", sa.Boolean(), nullable=False),
        sa.Column("baptism_status", sa.Boolean(), nullable=False),
        sa.Column("baptism_date", sa.Date(), nullable=True),
        sa.Column("faith_declaration_status", sa.Boolean(), nullable=False),
        sa.Column(
            "ministry_membership",
            sa.Enum(*MINISTRIES, name="member_ministry_enum"),
            nullable=True,
        ),
        sa.Column("emergency_contact", sa.String(), nullable=True),
        sa.Column("owner", sa.Uuid(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)
    op.create_index("ix_members_owner", "members", ["owner"])

    op.create_table(
        "churchdays",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "service_type",
            sa.Enum(*SERVICE_TYPES, name="churchday_service_type_enum"),
            nullable=False,
        ),
        sa.Column("attendance", sa.Integer(), nullable=True),
        sa.Column("speaker", sa.String(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("service_id", sa.Uuid(), nullable=True),
        sa.Column("owner", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_churchdays_owner", "churchdays", ["owner"])

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("attendance", sa.Integer(), server_default="0", nullable=False),
        sa.Column("speaker", sa.String(), nullable=True),
        sa.Column("theme", sa.String(), nullable=True),
        sa.Column("churchday_id", sa.Uuid(), nullable=True),
        sa.Column("owner", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_services_churchday_id", "services", ["churchday_id"])
    op.create_index("ix_services_owner", "services", ["owner"])

    op.create_table(
        "attendance_records",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("member_id", sa.Uuid(), nullable=False),
        sa.Column("check_in", sa.DateTime(timezone=True), nullable=True),
        sa.Column("check_out", sa.DateTime(timezone=True), nullable=True),
        sa.Column("owner", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_attendance_records_member_id", "attendance_records", ["member_id"]
    )
    op.create_index("ix_attendance_records_owner", "attendance_records", ["owner"])
    op.create_index(
        "ix_attendance_records_check_in", "attendance_records", ["check_in"]
    )
    op.create_index(
        "uq_attendance_records_member_open",
        "attendance_records",
        ["member_id"],
        unique=True,
        postgresql_where=sa.text("check_out IS NULL"),
        sqlite_where=sa.text("check_out IS NULL"),
    )


def downgrade() -> None:
    op.drop_table("attendance_records")
    op.drop_table("services")
    op.drop_table("churchdays")
    op.drop_table("members")
    op.drop_table("auth_sessions")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_name in (
        "churchday_service_type_enum",
        "member_ministry_enum",
        "member_marital_status_enum",
        "member_gender_enum",
        "user_role_enum",
    ):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
