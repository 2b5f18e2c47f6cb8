from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.repo.games_repo import GamesRepo
from millionaire.game.sessions.internal import build_game_snapshot, load_owned_game
from millionaire.game.sessions.types import GameSnapshot


async def get_game(session: AsyncSession, *, user_id: int, game_id: int) -> GameSnapshot:
    game = await load_owned_game(session, user_id=user_id, game_id=game_id, for_update=False)
    return await build_game_snapshot(session, game=game)


async def list_user_games(session: AsyncSession, *, user_id: int) -> list[GameSnapshot]:
    games = await GamesRepo.list_by_user(session, user_id=user_id)
    return [
        await build_game_snapshot(session, game=game, include_question=False) for game in games
    ]
