from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.questions import Question


class QuestionsRepo:
    @staticmethod
    async def count_active_by_level(session: AsyncSession) -> dict[int, int]:
        stmt = (
            select(Question.level, func.count(Question.id))
            .where(Question.status == "ACTIVE")
            .group_by(Question.level)
        )
        result = await session.execute(stmt)
        return {int(level): int(count) for level, count in result.all()}

    @staticmethod
    async def get_active_by_level_at(
        session: AsyncSession,
        *,
        level: int,
        offset: int,
    ) -> Question | None:
        stmt = (
            select(Question)
            .where(Question.level == level, Question.status == "ACTIVE")
            .order_by(Question.id.asc())
            .offset(offset)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, question: Question) -> Question:
        session.add(question)
        await session.flush()
        return question
