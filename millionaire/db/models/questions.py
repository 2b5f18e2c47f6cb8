from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from millionaire.db.models.base import Base, BigIntegerPK


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("level >= 0 AND level <= 14", name="level_range"),
        CheckConstraint(
            "correct_option_id >= 0 AND correct_option_id <= 3",
            name="correct_option_range",
        ),
        CheckConstraint("status IN ('ACTIVE','DISABLED')", name="status"),
        Index("idx_questions_level_status", "level", "status"),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    option_1: Mapped[str] = mapped_column(Text, nullable=False)
    option_2: Mapped[str] = mapped_column(Text, nullable=False)
    option_3: Mapped[str] = mapped_column(Text, nullable=False)
    option_4: Mapped[str] = mapped_column(Text, nullable=False)
    correct_option_id: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="ACTIVE")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @property
    def options(self) -> tuple[str, str, str, str]:
        return (self.option_1, self.option_2, self.option_3, self.option_4)
