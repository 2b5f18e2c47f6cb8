from __future__ import annotations

import random
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.game.sessions.sessions_answer import submit_answer
from millionaire.game.sessions.sessions_cash_out import take_money
from millionaire.game.sessions.sessions_help import use_help
from millionaire.game.sessions.sessions_queries import get_game, list_user_games
from millionaire.game.sessions.sessions_start import start_game
from millionaire.game.sessions.types import AnswerResult, GameSnapshot, HelpResult


class GameSessionService:
    @staticmethod
    async def start_game(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        rng: random.Random | None = None,
    ) -> GameSnapshot:
        return await start_game(session, user_id=user_id, now_utc=now_utc, rng=rng)

    @staticmethod
    async def answer(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        letter: str,
        now_utc: datetime,
    ) -> AnswerResult:
        return await submit_answer(
            session,
            user_id=user_id,
            game_id=game_id,
            letter=letter,
            now_utc=now_utc,
        )

    @staticmethod
    async def use_help(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        help_type: str,
        now_utc: datetime,
        rng: random.Random | None = None,
    ) -> HelpResult:
        return await use_help(
            session,
            user_id=user_id,
            game_id=game_id,
            help_type=help_type,
            now_utc=now_utc,
            rng=rng,
        )

    @staticmethod
    async def take_money(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        now_utc: datetime,
    ) -> GameSnapshot:
        return await take_money(session, user_id=user_id, game_id=game_id, now_utc=now_utc)

    @staticmethod
    async def get_game(session: AsyncSession, *, user_id: int, game_id: int) -> GameSnapshot:
        return await get_game(session, user_id=user_id, game_id=game_id)

    @staticmethod
    async def list_user_games(session: AsyncSession, *, user_id: int) -> list[GameSnapshot]:
        return await list_user_games(session, user_id=user_id)
