from __future__ import annotations

import random
from datetime import datetime, timezone
from uuid import uuid4

from millionaire.db.models.questions import Question
from millionaire.db.repo.game_questions_repo import GameQuestionsRepo
from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.session import SessionLocal
from millionaire.game.constants import ANSWER_KEYS, QUESTION_LEVELS
from millionaire.game.sessions.service import GameSessionService
from millionaire.game.sessions.types import GameSnapshot
from millionaire.services.user_profiles import register_user

UTC = timezone.utc
NOW_UTC = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


async def create_user(name: str = "Mikhail", *, email: str | None = None) -> tuple[int, str]:
    async with SessionLocal.begin() as session:
        user, token = await register_user(
            session,
            name=name,
            email=email or f"{uuid4().hex[:12]}@example.com",
            now_utc=NOW_UTC,
        )
        return user.id, token


async def seed_questions(
    *,
    per_level: int = 1,
    levels: tuple[int, ...] = QUESTION_LEVELS,
) -> None:
    async with SessionLocal.begin() as session:
        for level in levels:
            for index in range(per_level):
                await QuestionsRepo.create(
                    session,
                    question=Question(
                        level=level,
                        text=f"Level {level} question {index}?",
                        option_1=f"right {level}-{index}",
                        option_2=f"wrong A {level}-{index}",
                        option_3=f"wrong B {level}-{index}",
                        option_4=f"wrong C {level}-{index}",
                        correct_option_id=0,
                        status="ACTIVE",
                        created_at=NOW_UTC,
                        updated_at=NOW_UTC,
                    ),
                )


async def start_game(user_id: int, *, now_utc: datetime = NOW_UTC, seed: int = 7) -> GameSnapshot:
    async with SessionLocal.begin() as session:
        return await GameSessionService.start_game(
            session,
            user_id=user_id,
            now_utc=now_utc,
            rng=random.Random(seed),
        )


async def correct_key(game_id: int) -> str:
    async with SessionLocal() as session:
        game = await GamesRepo.get_by_id(session, game_id)
        assert game is not None
        row = await GameQuestionsRepo.get_for_level(
            session,
            game_id=game_id,
            level=game.current_level,
        )
        assert row is not None
        game_question, question = row
        return game_question.correct_answer_key(question.correct_option_id)


async def wrong_key(game_id: int) -> str:
    right = await correct_key(game_id)
    return next(key for key in ANSWER_KEYS if key != right)


async def answer_correctly(user_id: int, game_id: int, *, times: int, now_utc: datetime = NOW_UTC) -> None:
    for _ in range(times):
        letter = await correct_key(game_id)
        async with SessionLocal.begin() as session:
            await GameSessionService.answer(
                session,
                user_id=user_id,
                game_id=game_id,
                letter=letter,
                now_utc=now_utc,
            )
