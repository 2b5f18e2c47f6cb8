from __future__ import annotations

import random
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.core.analytics_events import EVENT_SOURCE_API, emit_analytics_event
from millionaire.game.constants import (
    ANSWER_KEYS,
    HELP_AUDIENCE,
    HELP_FIFTY_FIFTY,
    HELP_FRIEND_CALL,
    HELP_USED_FLAGS,
)
from millionaire.game.help_generator import audience_distribution, fifty_fifty, friend_call
from millionaire.game.sessions.errors import AlreadyUsedError, UnknownHelpTypeError
from millionaire.game.sessions.internal import (
    build_game_snapshot,
    finish_if_timed_out,
    load_active_game_for_update,
    load_current_question,
    logger,
)
from millionaire.game.sessions.types import HelpResult


def _keys_in_play(help_hash: dict[str, object]) -> list[str]:
    remaining = help_hash.get(HELP_FIFTY_FIFTY)
    if isinstance(remaining, list) and remaining:
        return [str(key) for key in remaining]
    return list(ANSWER_KEYS)


async def use_help(
    session: AsyncSession,
    *,
    user_id: int,
    game_id: int,
    help_type: str,
    now_utc: datetime,
    rng: random.Random | None = None,
) -> HelpResult:
    used_flag = HELP_USED_FLAGS.get(help_type)
    if used_flag is None:
        raise UnknownHelpTypeError
    rng = rng or random.Random()

    game = await load_active_game_for_update(session, user_id=user_id, game_id=game_id)
    if await finish_if_timed_out(session, game=game, now_utc=now_utc):
        return HelpResult(
            game=await build_game_snapshot(session, game=game),
            help_type=help_type,
            timed_out=True,
        )
    if getattr(game, used_flag):
        raise AlreadyUsedError(help_type)

    game_question, question = await load_current_question(session, game=game)
    correct_key = game_question.correct_answer_key(question.correct_option_id)
    help_hash = dict(game_question.help_hash or {})

    if help_type == HELP_FIFTY_FIFTY:
        help_hash[HELP_FIFTY_FIFTY] = fifty_fifty(ANSWER_KEYS, correct_key, rng)
    elif help_type == HELP_AUDIENCE:
        help_hash[HELP_AUDIENCE] = audience_distribution(_keys_in_play(help_hash), correct_key, rng)
    elif help_type == HELP_FRIEND_CALL:
        help_hash[HELP_FRIEND_CALL] = friend_call(_keys_in_play(help_hash), correct_key, rng)

    # Reassign so the JSON column is flagged dirty.
    game_question.help_hash = help_hash
    setattr(game, used_flag, True)
    game.updated_at = now_utc
    await session.flush()

    await emit_analytics_event(
        session,
        event_type="game_help_used",
        source=EVENT_SOURCE_API,
        happened_at=now_utc,
        user_id=user_id,
        payload={"game_id": game.id, "help_type": help_type, "level": game.current_level},
    )
    logger.info("game_help_used", game_id=game.id, user_id=user_id, help_type=help_type)
    return HelpResult(
        game=await build_game_snapshot(session, game=game),
        help_type=help_type,
    )
