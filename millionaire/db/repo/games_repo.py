from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.games import Game


class GamesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, game_id: int) -> Game | None:
        return await session.get(Game, game_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, game_id: int) -> Game | None:
        stmt = select(Game).where(Game.id == game_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_in_progress_for_user(session: AsyncSession, *, user_id: int) -> Game | None:
        stmt = select(Game).where(Game.user_id == user_id, Game.finished_at.is_(None))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_user(session: AsyncSession, *, user_id: int) -> list[Game]:
        stmt = (
            select(Game)
            .where(Game.user_id == user_id)
            .order_by(Game.created_at.desc(), Game.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create(session: AsyncSession, *, game: Game) -> Game:
        session.add(game)
        await session.flush()
        return game
