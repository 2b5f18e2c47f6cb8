from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class GameQuestionView:
    level: int
    text: str
    options: dict[str, str]
    help_hash: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class GameSnapshot:
    game_id: int
    user_id: int
    current_level: int
    prize: int
    status: str
    is_failed: bool
    fifty_fifty_used: bool
    audience_help_used: bool
    friend_call_used: bool
    created_at: datetime
    finished_at: datetime | None = None
    current_question: GameQuestionView | None = None

    @property
    def finished(self) -> bool:
        return self.finished_at is not None


@dataclass(slots=True)
class AnswerResult:
    game: GameSnapshot
    is_correct: bool
    correct_answer_key: str
    correct_answer_text: str
    timed_out: bool = False


@dataclass(slots=True)
class HelpResult:
    game: GameSnapshot
    help_type: str
    timed_out: bool = False


@dataclass(slots=True)
class UserProfile:
    user_id: int
    name: str
    balance: int
    games: list[GameSnapshot]
