from __future__ import annotations

from fastapi import APIRouter, Query, Request, status

from millionaire.db.session import SessionLocal
from millionaire.game.sessions.errors import UserNotFoundError
from millionaire.services.identity import build_request_context
from millionaire.services.user_profiles import get_user_profile, list_leaderboard

from .games_helpers import ROOT_PATH, as_game_model, http_error, user_path
from .users_models import LeaderboardEntry, LeaderboardResponse, UserProfileResponse

router = APIRouter(tags=["users"])


async def _leaderboard(limit: int) -> LeaderboardResponse:
    async with SessionLocal() as session:
        users = await list_leaderboard(session, limit=limit)
    return LeaderboardResponse(
        users=[
            LeaderboardEntry(
                id=user.id,
                name=user.name,
                balance=user.balance,
                profile_path=user_path(user.id),
            )
            for user in users
        ]
    )


@router.get("/", response_model=LeaderboardResponse)
async def home(limit: int = Query(default=50, ge=1, le=500)) -> LeaderboardResponse:
    return await _leaderboard(limit)


@router.get("/users", response_model=LeaderboardResponse)
async def list_users(limit: int = Query(default=50, ge=1, le=500)) -> LeaderboardResponse:
    return await _leaderboard(limit)


@router.get("/users/{user_id}", response_model=UserProfileResponse)
async def show_user(user_id: int, request: Request) -> UserProfileResponse:
    try:
        async with SessionLocal() as session:
            context = await build_request_context(session, request)
            profile = await get_user_profile(session, user_id=user_id)
    except UserNotFoundError as exc:
        raise http_error(status.HTTP_404_NOT_FOUND, "E_USER_NOT_FOUND", ROOT_PATH) from exc

    return UserProfileResponse(
        id=profile.user_id,
        name=profile.name,
        balance=profile.balance,
        can_edit=context.user_id == profile.user_id,
        games=[as_game_model(game) for game in profile.games],
    )
