"""Initial schema — users, health data, meals, chat log, records, events, activities, daily stats.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id", UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )


def _now(name: str) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("profile_image", sa.String(1024), nullable=True),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("height_cm", sa.Float, nullable=False),
        sa.Column("current_weight_kg", sa.Float, nullable=False),
        sa.Column("gender", sa.String(10), nullable=False),
        sa.Column("health_goal", sa.String(20), nullable=False),
        sa.Column("target_weight_kg", sa.Float, nullable=True),
        sa.Column("target_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("activity_level", sa.String(20), nullable=False),
        _now("created_at"),
        _now("updated_at"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "health_data",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("bmi", sa.Float, nullable=False),
        sa.Column("calorie_needs", sa.Float, nullable=False),
        _now("updated_at"),
        sa.UniqueConstraint("user_id", name="uq_health_data_user_id"),
    )

    op.create_table(
        "meal_plans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        _now("date"),
        sa.Column("breakfast", sa.Text, nullable=False, server_default=""),
        sa.Column("lunch", sa.Text, nullable=False, server_default=""),
        sa.Column("dinner", sa.Text, nullable=False, server_default=""),
        sa.Column("snacks", sa.Text, nullable=False, server_default=""),
        sa.Column("total_calories", sa.Float, nullable=False, server_default="0"),
        sa.Column("protein_grams", sa.Float, nullable=False, server_default="0"),
        sa.Column("carbs_grams", sa.Float, nullable=False, server_default="0"),
        sa.Column("fats_grams", sa.Float, nullable=False, server_default="0"),
    )
    op.create_index("ix_meal_plans_user_id", "meal_plans", ["user_id"])

    op.create_table(
        "chatbot_interactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("question", sa.Text, nullable=False),
        sa.Column("answer", sa.Text, nullable=False),
        sa.Column("is_relevant", sa.Boolean, nullable=False, server_default="true"),
        _now("created_at"),
    )
    op.create_index(
        "ix_chatbot_interactions_user_id", "chatbot_interactions", ["user_id"],
    )

    op.create_table(
        "health_records",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("weight", sa.Float, nullable=True),
        sa.Column("diagnosis", sa.Text, nullable=True),
        sa.Column("medications", sa.Text, nullable=True),
        sa.Column("allergies", sa.Text, nullable=True),
        sa.Column("procedures", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        _now("visit_date"),
        _now("created_at"),
    )
    op.create_index("ix_health_records_user_id", "health_records", ["user_id"])

    op.create_table(
        "wearable_data",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("steps", sa.Integer, nullable=True),
        sa.Column("heart_rate", sa.Integer, nullable=True),
        sa.Column("sleep_hours", sa.Float, nullable=True),
        sa.Column("calories_burned", sa.Integer, nullable=True),
        _now("created_at"),
    )
    op.create_index("ix_wearable_data_user_id", "wearable_data", ["user_id"])

    op.create_table(
        "events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("duration", sa.Integer, nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("trainer", sa.String(120), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "creator_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        _now("created_at"),
        _now("updated_at"),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])
    op.create_index("ix_events_creator_id", "events", ["creator_id"])

    op.create_table(
        "event_registrations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column(
            "event_id", UUID(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False,
        ),
        _now("registered_at"),
        sa.UniqueConstraint(
            "user_id", "event_id", name="uq_event_registrations_user_event",
        ),
    )
    op.create_index(
        "ix_event_registrations_event_id", "event_registrations", ["event_id"],
    )

    op.create_table(
        "activities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("duration", sa.Integer, nullable=False),
        sa.Column("calories_burnt", sa.Integer, nullable=False),
        _now("date"),
    )
    op.create_index("ix_activities_user_id", "activities", ["user_id"])

    op.create_table(
        "daily_stats",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("steps", sa.Integer, nullable=False, server_default="0"),
        sa.Column("active_calories", sa.Integer, nullable=False, server_default="0"),
        sa.Column("heart_rate_avg", sa.Float, nullable=True),
        sa.Column("sleep_hours", sa.Float, nullable=True),
        sa.Column("weight_kg", sa.Float, nullable=True),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_stats_user_date"),
    )


def downgrade() -> None:
    op.drop_table("daily_stats")
    op.drop_table("activities")
    op.drop_table("event_registrations")
    op.drop_table("events")
    op.drop_table("wearable_data")
    op.drop_table("health_records")
    op.drop_table("chatbot_interactions")
    op.drop_table("meal_plans")
    op.drop_table("health_data")
    op.drop_table("users")
