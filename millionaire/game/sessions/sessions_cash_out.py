from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.game.rules import banked_prize
from millionaire.game.sessions.internal import (
    build_game_snapshot,
    finish_game,
    finish_if_timed_out,
    load_active_game_for_update,
)
from millionaire.game.sessions.types import GameSnapshot


async def take_money(
    session: AsyncSession,
    *,
    user_id: int,
    game_id: int,
    now_utc: datetime,
) -> GameSnapshot:
    game = await load_active_game_for_update(session, user_id=user_id, game_id=game_id)
    if not await finish_if_timed_out(session, game=game, now_utc=now_utc):
        await finish_game(
            session,
            game=game,
            prize=banked_prize(game.current_level),
            failed=False,
            now_utc=now_utc,
        )
    return await build_game_snapshot(session, game=game)
