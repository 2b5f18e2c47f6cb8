from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    SmallInteger,
    false,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from millionaire.db.models.base import Base, BigIntegerPK


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint("current_level >= 0 AND current_level <= 15", name="current_level_range"),
        CheckConstraint("prize >= 0", name="prize_non_negative"),
        Index("idx_games_user_created", "user_id", "created_at"),
        Index(
            "uq_games_user_in_progress",
            "user_id",
            unique=True,
            postgresql_where=text("finished_at IS NULL"),
            sqlite_where=text("finished_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    current_level: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    prize: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    is_failed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    fifty_fifty_used: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    audience_help_used: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    friend_call_used: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def finished(self) -> bool:
        return self.finished_at is not None
