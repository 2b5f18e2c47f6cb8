from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.core.analytics_events import EVENT_SOURCE_SYSTEM, emit_analytics_event
from millionaire.db.models.users import User
from millionaire.db.repo.users_repo import UsersRepo
from millionaire.game.sessions.errors import UserNotFoundError
from millionaire.game.sessions.service import GameSessionService
from millionaire.game.sessions.types import UserProfile
from millionaire.services.identity import generate_api_token, hash_api_token

logger = structlog.get_logger(__name__)


class UserEmailTakenError(Exception):
    pass


async def get_user_profile(session: AsyncSession, *, user_id: int) -> UserProfile:
    user = await UsersRepo.get_by_id(session, user_id)
    if user is None:
        raise UserNotFoundError
    games = await GameSessionService.list_user_games(session, user_id=user.id)
    return UserProfile(user_id=user.id, name=user.name, balance=user.balance, games=games)


async def list_leaderboard(session: AsyncSession, *, limit: int = 50) -> list[User]:
    return await UsersRepo.list_top_by_balance(session, limit=limit)


async def register_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    now_utc: datetime,
) -> tuple[User, str]:
    """Create a user and return it with its plain API token.

    Only the token hash is stored, so the plain token is shown once.
    """
    normalized_email = email.strip().lower()
    if await UsersRepo.get_by_email(session, normalized_email) is not None:
        raise UserEmailTakenError
    token = generate_api_token()
    try:
        user = await UsersRepo.create(
            session,
            name=name.strip(),
            email=normalized_email,
            api_token_hash=hash_api_token(token),
            created_at=now_utc,
        )
    except IntegrityError as exc:
        raise UserEmailTakenError from exc
    await emit_analytics_event(
        session,
        event_type="user_registered",
        source=EVENT_SOURCE_SYSTEM,
        happened_at=now_utc,
        user_id=user.id,
    )
    logger.info("user_registered", user_id=user.id)
    return user, token
