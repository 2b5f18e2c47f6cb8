from __future__ import annotations

from sqlalchemy import JSON, BigInteger, ForeignKey, SmallInteger, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from millionaire.db.models.base import Base, BigIntegerPK


class GameQuestion(Base):
    """A question placed at one level of a game.

    ``option_a`` .. ``option_d`` hold the index of the question option shown
    under that letter, so every game gets its own option order.
    """

    __tablename__ = "game_questions"
    __table_args__ = (UniqueConstraint("game_id", "level", name="uq_game_questions_game_level"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("games.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("questions.id"), nullable=False)
    level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    option_a: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    option_b: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    option_c: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    option_d: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    help_hash: Mapped[dict[str, object]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )

    @property
    def option_map(self) -> dict[str, int]:
        return {
            "a": self.option_a,
            "b": self.option_b,
            "c": self.option_c,
            "d": self.option_d,
        }

    def correct_answer_key(self, correct_option_id: int) -> str:
        for letter, option_id in self.option_map.items():
            if option_id == correct_option_id:
                return letter
        raise ValueError(f"option {correct_option_id} is not mapped in game question {self.id}")
