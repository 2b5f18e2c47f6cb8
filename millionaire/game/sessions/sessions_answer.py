from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.core.analytics_events import EVENT_SOURCE_API, emit_analytics_event
from millionaire.game.constants import ANSWER_KEYS, MAX_LEVEL, PRIZES
from millionaire.game.rules import banked_prize, fireproof_prize, is_final_level
from millionaire.game.sessions.errors import InvalidAnswerKeyError
from millionaire.game.sessions.internal import (
    build_game_snapshot,
    finish_game,
    finish_if_timed_out,
    load_active_game_for_update,
    load_current_question,
    logger,
)
from millionaire.game.sessions.types import AnswerResult


async def submit_answer(
    session: AsyncSession,
    *,
    user_id: int,
    game_id: int,
    letter: str,
    now_utc: datetime,
) -> AnswerResult:
    selected_key = letter.strip().lower()
    if selected_key not in ANSWER_KEYS:
        raise InvalidAnswerKeyError

    game = await load_active_game_for_update(session, user_id=user_id, game_id=game_id)
    game_question, question = await load_current_question(session, game=game)
    correct_key = game_question.correct_answer_key(question.correct_option_id)
    correct_text = question.options[question.correct_option_id]
    answered_level = game.current_level

    if await finish_if_timed_out(session, game=game, now_utc=now_utc):
        return AnswerResult(
            game=await build_game_snapshot(session, game=game),
            is_correct=False,
            correct_answer_key=correct_key,
            correct_answer_text=correct_text,
            timed_out=True,
        )

    is_correct = selected_key == correct_key
    if is_correct:
        game.current_level += 1
        if is_final_level(answered_level):
            await finish_game(
                session,
                game=game,
                prize=PRIZES[MAX_LEVEL],
                failed=False,
                now_utc=now_utc,
            )
        else:
            game.prize = banked_prize(game.current_level)
            game.updated_at = now_utc
            await session.flush()
    else:
        await finish_game(
            session,
            game=game,
            prize=fireproof_prize(answered_level - 1),
            failed=True,
            now_utc=now_utc,
        )

    await emit_analytics_event(
        session,
        event_type="game_answered",
        source=EVENT_SOURCE_API,
        happened_at=now_utc,
        user_id=user_id,
        payload={
            "game_id": game.id,
            "level": answered_level,
            "question_id": question.id,
            "is_correct": is_correct,
        },
    )
    logger.info(
        "game_answered",
        game_id=game.id,
        user_id=user_id,
        level=answered_level,
        is_correct=is_correct,
    )
    return AnswerResult(
        game=await build_game_snapshot(session, game=game),
        is_correct=is_correct,
        correct_answer_key=correct_key,
        correct_answer_text=correct_text,
    )
