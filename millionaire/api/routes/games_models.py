from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class NoticeModel(BaseModel):
    level: Literal["notice", "alert", "warning", "info"]
    code: str


class GameQuestionModel(BaseModel):
    level: int = Field(ge=0)
    text: str
    options: dict[str, str]
    help_hash: dict[str, Any] = Field(default_factory=dict)


class GameModel(BaseModel):
    id: int
    user_id: int
    current_level: int = Field(ge=0)
    prize: int = Field(ge=0)
    status: str
    is_failed: bool
    fifty_fifty_used: bool
    audience_help_used: bool
    friend_call_used: bool
    created_at: datetime
    finished_at: datetime | None = None
    current_question: GameQuestionModel | None = None


class GameActionResponse(BaseModel):
    game: GameModel
    redirect_to: str
    notice: NoticeModel | None = None


class AnswerRequest(BaseModel):
    letter: Literal["a", "b", "c", "d"]


class AnswerResponse(GameActionResponse):
    is_correct: bool
    correct_answer_key: str
    correct_answer_text: str


class HelpRequest(BaseModel):
    help_type: Literal["fifty_fifty", "audience_help", "friend_call"]
