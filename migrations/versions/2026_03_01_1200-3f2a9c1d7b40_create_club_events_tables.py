"""create club events tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-03-01 12:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f2a9c1d7b40"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ("Student", "Club Admin", "Administrator")
EVENT_STATUSES = ("Draft", "Published", "Cancelled", "Completed")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "universities",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_universities_name", "universities", ["name"])

    op.create_table(
        "users",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("role", sa.Enum(*USER_ROLES, name="user_role_enum"), nullable=False),
        sa.Column("university_id", sa.UUID(), nullable=True),
        sa.Column("profile_picture", sa.String(500), nullable=True),
        sa.Column("major", sa.String(255), nullable=True),
        sa.Column("year", sa.String(50), nullable=True),
        sa.ForeignKeyConstraint(["university_id"], ["universities.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_university_id", "users", ["university_id"])

    op.create_table(
        "clubs",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("university_id", sa.UUID(), nullable=False),
        sa.Column("president_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["university_id"], ["universities.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["president_id"], ["users.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_clubs_name", "clubs", ["name"])
    op.create_index("ix_clubs_university_id", "clubs", ["university_id"])
    op.create_index("ix_clubs_president_id", "clubs", ["president_id"])

    op.create_table(
        "club_members",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("club_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.ForeignKeyConstraint(["club_id"], ["clubs.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("club_id", "user_id", name="uq_club_members_club_user"),
    )
    op.create_index("ix_club_members_club_id", "club_members", ["club_id"])
    op.create_index("ix_club_members_user_id", "club_members", ["user_id"])

    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_type", sa.String(100), nullable=True),
        sa.Column("club_id", sa.UUID(), nullable=False),
        sa.Column("university_id", sa.UUID(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("start_time", sa.String(10), nullable=False),
        sa.Column("end_time", sa.String(10), nullable=False),
        sa.Column("venue", sa.String(500), nullable=False),
        sa.Column("max_attendees", sa.Integer(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("is_registration_required", sa.Boolean(), nullable=False),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("requirements", sa.Text(), nullable=True),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("poster", sa.String(500), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("status", sa.Enum(*EVENT_STATUSES, name="event_status_enum"), nullable=False),
        sa.ForeignKeyConstraint(["club_id"], ["clubs.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["university_id"], ["universities.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_events_title", "events", ["title"])
    op.create_index("ix_events_club_id", "events", ["club_id"])
    op.create_index("ix_events_university_id", "events", ["university_id"])
    op.create_index("ix_events_start_date", "events", ["start_date"])

    op.create_table(
        "event_organizers",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "user_id"),
    )

    op.create_table(
        "event_attendees",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("attended", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_attendees_event_user"),
    )
    op.create_index("ix_event_attendees_event_id", "event_attendees", ["event_id"])
    op.create_index("ix_event_attendees_user_id", "event_attendees", ["user_id"])

    op.create_table(
        "event_reviews",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_reviews_event_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_event_reviews_rating"),
    )
    op.create_index("ix_event_reviews_event_id", "event_reviews", ["event_id"])

    op.create_table(
        "event_registrations",
        sa.Column("uuid", sa.UUID(), nullable=False),
        *_timestamps(),
        sa.Column("event_id", sa.UUID(), nullable=True),
        sa.Column("event_title", sa.String(255), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("student_name", sa.String(255), nullable=False),
        sa.Column("university_id", sa.UUID(), nullable=True),
        sa.Column("university_name", sa.String(255), nullable=False),
        sa.Column("registered_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["university_id"], ["universities.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_event_registrations_event_id", "event_registrations", ["event_id"])
    op.create_index("ix_event_registrations_user_id", "event_registrations", ["user_id"])


def downgrade() -> None:
    op.drop_table("event_registrations")
    op.drop_table("event_reviews")
    op.drop_table("event_attendees")
    op.drop_table("event_organizers")
    op.drop_table("events")
    op.drop_table("club_members")
    op.drop_table("clubs")
    op.drop_table("users")
    op.drop_table("universities")
    sa.Enum(name="event_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="user_role_enum").drop(op.get_bind(), checkfirst=True)
