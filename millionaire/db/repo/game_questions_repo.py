from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.questions import Question


class GameQuestionsRepo:
    @staticmethod
    async def create_many(
        session: AsyncSession,
        *,
        game_questions: Sequence[GameQuestion],
    ) -> list[GameQuestion]:
        session.add_all(game_questions)
        await session.flush()
        return list(game_questions)

    @staticmethod
    async def get_for_level(
        session: AsyncSession,
        *,
        game_id: int,
        level: int,
    ) -> tuple[GameQuestion, Question] | None:
        stmt = (
            select(GameQuestion, Question)
            .join(Question, Question.id == GameQuestion.question_id)
            .where(GameQuestion.game_id == game_id, GameQuestion.level == level)
        )
        result = await session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    @staticmethod
    async def count_for_game(session: AsyncSession, *, game_id: int) -> int:
        stmt = select(func.count(GameQuestion.id)).where(GameQuestion.game_id == game_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())
