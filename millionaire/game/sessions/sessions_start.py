from __future__ import annotations

import random
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.core.analytics_events import EVENT_SOURCE_API, emit_analytics_event
from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.games import Game
from millionaire.db.models.questions import Question
from millionaire.db.repo.game_questions_repo import GameQuestionsRepo
from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.repo.users_repo import UsersRepo
from millionaire.game.constants import QUESTION_LEVELS
from millionaire.game.sessions.errors import (
    ConflictError,
    NotEnoughQuestionsError,
    UserNotFoundError,
)
from millionaire.game.sessions.internal import build_game_snapshot, logger
from millionaire.game.sessions.types import GameSnapshot


async def _pick_questions(session: AsyncSession, *, rng: random.Random) -> list[Question]:
    counts = await QuestionsRepo.count_active_by_level(session)
    picked: list[Question] = []
    for level in QUESTION_LEVELS:
        available = counts.get(level, 0)
        if available <= 0:
            raise NotEnoughQuestionsError(level)
        question = await QuestionsRepo.get_active_by_level_at(
            session,
            level=level,
            offset=rng.randrange(available),
        )
        if question is None:
            raise NotEnoughQuestionsError(level)
        picked.append(question)
    return picked


def _build_game_question(*, game_id: int, question: Question, rng: random.Random) -> GameQuestion:
    order = [0, 1, 2, 3]
    rng.shuffle(order)
    return GameQuestion(
        game_id=game_id,
        question_id=question.id,
        level=question.level,
        option_a=order[0],
        option_b=order[1],
        option_c=order[2],
        option_d=order[3],
        help_hash={},
    )


async def start_game(
    session: AsyncSession,
    *,
    user_id: int,
    now_utc: datetime,
    rng: random.Random | None = None,
) -> GameSnapshot:
    rng = rng or random.Random()

    # Row lock serializes concurrent starts for the same user.
    user = await UsersRepo.get_by_id_for_update(session, user_id)
    if user is None:
        raise UserNotFoundError

    existing = await GamesRepo.get_in_progress_for_user(session, user_id=user_id)
    if existing is not None:
        logger.info("game_start_rejected", user_id=user_id, existing_game_id=existing.id)
        raise ConflictError(existing_game_id=existing.id)

    questions = await _pick_questions(session, rng=rng)

    try:
        game = await GamesRepo.create(
            session,
            game=Game(
                user_id=user_id,
                current_level=0,
                prize=0,
                is_failed=False,
                fifty_fifty_used=False,
                audience_help_used=False,
                friend_call_used=False,
                created_at=now_utc,
                updated_at=now_utc,
            ),
        )
    except IntegrityError as exc:
        raise ConflictError from exc

    await GameQuestionsRepo.create_many(
        session,
        game_questions=[
            _build_game_question(game_id=game.id, question=question, rng=rng)
            for question in questions
        ],
    )

    await emit_analytics_event(
        session,
        event_type="game_started",
        source=EVENT_SOURCE_API,
        happened_at=now_utc,
        user_id=user_id,
        payload={"game_id": game.id},
    )
    logger.info("game_started", game_id=game.id, user_id=user_id)
    return await build_game_snapshot(session, game=game)
