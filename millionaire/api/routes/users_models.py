from __future__ import annotations

from pydantic import BaseModel, Field

from .games_models import GameModel


class UserProfileResponse(BaseModel):
    id: int
    name: str
    balance: int = Field(ge=0)
    can_edit: bool
    games: list[GameModel]


class LeaderboardEntry(BaseModel):
    id: int
    name: str
    balance: int = Field(ge=0)
    profile_path: str


class LeaderboardResponse(BaseModel):
    users: list[LeaderboardEntry]
