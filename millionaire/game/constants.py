from __future__ import annotations

from datetime import timedelta

PRIZES: tuple[int, ...] = (
    100,
    200,
    300,
    500,
    1_000,
    2_000,
    4_000,
    8_000,
    16_000,
    32_000,
    64_000,
    125_000,
    250_000,
    500_000,
    1_000_000,
)
FIREPROOF_LEVELS: tuple[int, ...] = (4, 9, 14)
QUESTION_LEVELS: tuple[int, ...] = tuple(range(15))
MAX_LEVEL = QUESTION_LEVELS[-1]
DEFAULT_TIME_LIMIT = timedelta(minutes=35)

ANSWER_KEYS: tuple[str, ...] = ("a", "b", "c", "d")

HELP_FIFTY_FIFTY = "fifty_fifty"
HELP_AUDIENCE = "audience_help"
HELP_FRIEND_CALL = "friend_call"
HELP_TYPES: tuple[str, ...] = (HELP_FIFTY_FIFTY, HELP_AUDIENCE, HELP_FRIEND_CALL)
HELP_USED_FLAGS: dict[str, str] = {
    HELP_FIFTY_FIFTY: "fifty_fifty_used",
    HELP_AUDIENCE: "audience_help_used",
    HELP_FRIEND_CALL: "friend_call_used",
}

STATUS_IN_PROGRESS = "in_progress"
STATUS_WON = "won"
STATUS_FAIL = "fail"
STATUS_TIMEOUT = "timeout"
STATUS_MONEY = "money"
