from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.core.analytics_events import EVENT_SOURCE_API, emit_analytics_event
from millionaire.core.config import get_settings
from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.games import Game
from millionaire.db.models.questions import Question
from millionaire.db.repo.game_questions_repo import GameQuestionsRepo
from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.users_repo import UsersRepo
from millionaire.game.rules import fireproof_prize, game_status, is_time_out
from millionaire.game.sessions.errors import (
    AlreadyFinishedError,
    AuthorizationError,
    GameNotFoundError,
)
from millionaire.game.sessions.types import GameQuestionView, GameSnapshot

logger = structlog.get_logger("millionaire.game.sessions")


def configured_time_limit() -> timedelta:
    return timedelta(seconds=max(1, int(get_settings().game_time_limit_seconds)))


def _status_of(game: Game) -> str:
    return game_status(
        current_level=game.current_level,
        is_failed=game.is_failed,
        created_at=game.created_at,
        finished_at=game.finished_at,
        time_limit=configured_time_limit(),
    )


async def load_owned_game(
    session: AsyncSession,
    *,
    user_id: int,
    game_id: int,
    for_update: bool,
) -> Game:
    if for_update:
        game = await GamesRepo.get_by_id_for_update(session, game_id)
    else:
        game = await GamesRepo.get_by_id(session, game_id)
    if game is None:
        raise GameNotFoundError
    if game.user_id != user_id:
        raise AuthorizationError
    return game


async def load_active_game_for_update(
    session: AsyncSession,
    *,
    user_id: int,
    game_id: int,
) -> Game:
    game = await load_owned_game(session, user_id=user_id, game_id=game_id, for_update=True)
    if game.finished:
        raise AlreadyFinishedError
    return game


async def load_current_question(
    session: AsyncSession,
    *,
    game: Game,
) -> tuple[GameQuestion, Question]:
    row = await GameQuestionsRepo.get_for_level(session, game_id=game.id, level=game.current_level)
    if row is None:
        raise GameNotFoundError
    return row


async def finish_game(
    session: AsyncSession,
    *,
    game: Game,
    prize: int,
    failed: bool,
    now_utc: datetime,
) -> None:
    game.finished_at = now_utc
    game.updated_at = now_utc
    game.prize = prize
    game.is_failed = failed
    await session.flush()

    balance = None
    if prize > 0:
        balance = await UsersRepo.credit_balance(session, user_id=game.user_id, amount=prize)

    status = _status_of(game)
    await emit_analytics_event(
        session,
        event_type="game_finished",
        source=EVENT_SOURCE_API,
        happened_at=now_utc,
        user_id=game.user_id,
        payload={
            "game_id": game.id,
            "status": status,
            "current_level": game.current_level,
            "prize": prize,
        },
    )
    logger.info(
        "game_finished",
        game_id=game.id,
        user_id=game.user_id,
        status=status,
        current_level=game.current_level,
        prize=prize,
        balance=balance,
    )


async def finish_if_timed_out(
    session: AsyncSession,
    *,
    game: Game,
    now_utc: datetime,
) -> bool:
    if not is_time_out(
        created_at=game.created_at,
        now_utc=now_utc,
        time_limit=configured_time_limit(),
    ):
        return False
    await finish_game(
        session,
        game=game,
        prize=fireproof_prize(game.current_level - 1),
        failed=True,
        now_utc=now_utc,
    )
    return True


async def build_game_snapshot(
    session: AsyncSession,
    *,
    game: Game,
    include_question: bool = True,
) -> GameSnapshot:
    current_question = None
    if include_question and not game.finished:
        row = await GameQuestionsRepo.get_for_level(
            session,
            game_id=game.id,
            level=game.current_level,
        )
        if row is not None:
            game_question, question = row
            current_question = GameQuestionView(
                level=game_question.level,
                text=question.text,
                options={
                    letter: question.options[option_id]
                    for letter, option_id in game_question.option_map.items()
                },
                help_hash=dict(game_question.help_hash or {}),
            )

    return GameSnapshot(
        game_id=game.id,
        user_id=game.user_id,
        current_level=game.current_level,
        prize=game.prize,
        status=_status_of(game),
        is_failed=game.is_failed,
        fifty_fifty_used=game.fifty_fifty_used,
        audience_help_used=game.audience_help_used,
        friend_call_used=game.friend_call_used,
        created_at=game.created_at,
        finished_at=game.finished_at,
        current_question=current_question,
    )
