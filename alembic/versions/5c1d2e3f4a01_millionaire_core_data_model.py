"""millionaire_core_data_model

Revision ID: 5c1d2e3f4a01
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5c1d2e3f4a01"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("api_token_hash", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("api_token_hash", name="uq_users_api_token_hash"),
    )
    op.create_index("idx_users_balance", "users", ["balance"])

    op.create_table(
        "questions",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("option_1", sa.Text(), nullable=False),
        sa.Column("option_2", sa.Text(), nullable=False),
        sa.Column("option_3", sa.Text(), nullable=False),
        sa.Column("option_4", sa.Text(), nullable=False),
        sa.Column("correct_option_id", sa.SmallInteger(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("level >= 0 AND level <= 14", name="ck_questions_level_range"),
        sa.CheckConstraint(
            "correct_option_id >= 0 AND correct_option_id <= 3",
            name="ck_questions_correct_option_range",
        ),
        sa.CheckConstraint("status IN ('ACTIVE','DISABLED')", name="ck_questions_status"),
        sa.UniqueConstraint("text", name="uq_questions_text"),
    )
    op.create_index("idx_questions_level_status", "questions", ["level", "status"])

    op.create_table(
        "games",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("current_level", sa.SmallInteger(), nullable=False),
        sa.Column("prize", sa.BigInteger(), nullable=False),
        sa.Column("is_failed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("fifty_fifty_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("audience_help_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("friend_call_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "current_level >= 0 AND current_level <= 15",
            name="ck_games_current_level_range",
        ),
        sa.CheckConstraint("prize >= 0", name="ck_games_prize_non_negative"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_games_user_id_users"),
    )
    op.create_index("idx_games_user_created", "games", ["user_id", "created_at"])
    op.create_index(
        "uq_games_user_in_progress",
        "games",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("finished_at IS NULL"),
    )

    op.create_table(
        "game_questions",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("game_id", sa.BigInteger(), nullable=False),
        sa.Column("question_id", sa.BigInteger(), nullable=False),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("option_a", sa.SmallInteger(), nullable=False),
        sa.Column("option_b", sa.SmallInteger(), nullable=False),
        sa.Column("option_c", sa.SmallInteger(), nullable=False),
        sa.Column("option_d", sa.SmallInteger(), nullable=False),
        sa.Column(
            "help_hash",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.ForeignKeyConstraint(["game_id"], ["games.id"], name="fk_game_questions_game_id_games"),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.id"],
            name="fk_game_questions_question_id_questions",
        ),
        sa.UniqueConstraint("game_id", "level", name="uq_game_questions_game_level"),
    )

    op.create_table(
        "analytics_events",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("event_type", sa.String(64), nullable=False),
        sa.Column("source", sa.String(16), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column(
            "payload",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("happened_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("source IN ('API','SYSTEM')", name="ck_analytics_events_source"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_analytics_events_user_id_users",
        ),
    )
    op.create_index(
        "idx_analytics_events_type_time",
        "analytics_events",
        ["event_type", "happened_at"],
    )
    op.create_index(
        "idx_analytics_events_user_time",
        "analytics_events",
        ["user_id", "happened_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_analytics_events_user_time", table_name="analytics_events")
    op.drop_index("idx_analytics_events_type_time", table_name="analytics_events")
    op.drop_table("analytics_events")
    op.drop_table("game_questions")
    op.drop_index("uq_games_user_in_progress", table_name="games")
    op.drop_index("idx_games_user_created", table_name="games")
    op.drop_table("games")
    op.drop_index("idx_questions_level_status", table_name="questions")
    op.drop_table("questions")
    op.drop_index("idx_users_balance", table_name="users")
    op.drop_table("users")
