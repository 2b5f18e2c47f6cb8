from __future__ import annotations

from datetime import datetime, timedelta, timezone

from millionaire.game.constants import (
    FIREPROOF_LEVELS,
    MAX_LEVEL,
    PRIZES,
    STATUS_FAIL,
    STATUS_IN_PROGRESS,
    STATUS_MONEY,
    STATUS_TIMEOUT,
    STATUS_WON,
)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def banked_prize(current_level: int) -> int:
    """Prize earned by the questions already answered."""
    if current_level <= 0:
        return 0
    return PRIZES[min(current_level, len(PRIZES)) - 1]


def fireproof_prize(answered_level: int) -> int:
    """Guaranteed prize once ``answered_level`` has been passed."""
    reached = [level for level in FIREPROOF_LEVELS if level <= answered_level]
    if not reached:
        return 0
    return PRIZES[reached[-1]]


def is_final_level(level: int) -> bool:
    return level >= MAX_LEVEL


def is_time_out(*, created_at: datetime, now_utc: datetime, time_limit: timedelta) -> bool:
    return as_utc(now_utc) - as_utc(created_at) > time_limit


def game_status(
    *,
    current_level: int,
    is_failed: bool,
    created_at: datetime,
    finished_at: datetime | None,
    time_limit: timedelta,
) -> str:
    if finished_at is None:
        return STATUS_IN_PROGRESS
    if is_failed:
        if as_utc(finished_at) - as_utc(created_at) > time_limit:
            return STATUS_TIMEOUT
        return STATUS_FAIL
    if current_level > MAX_LEVEL:
        return STATUS_WON
    return STATUS_MONEY
