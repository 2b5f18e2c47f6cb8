from __future__ import annotations

import random

from millionaire.game.constants import ANSWER_KEYS
from millionaire.game.help_generator import (
    FRIEND_NAMES,
    audience_distribution,
    fifty_fifty,
    friend_call,
)


def test_fifty_fifty_keeps_correct_and_one_wrong_key() -> None:
    for seed in range(50):
        keys = fifty_fifty(ANSWER_KEYS, "c", random.Random(seed))
        assert len(keys) == 2
        assert "c" in keys
        assert keys == sorted(keys)
        assert set(keys) <= set(ANSWER_KEYS)


def test_audience_distribution_sums_to_hundred_over_all_keys() -> None:
    for seed in range(100):
        distribution = audience_distribution(ANSWER_KEYS, "b", random.Random(seed))
        assert sorted(distribution) == list(ANSWER_KEYS)
        assert sum(distribution.values()) == 100
        assert all(value >= 0 for value in distribution.values())


def test_audience_distribution_respects_remaining_keys() -> None:
    distribution = audience_distribution(["a", "d"], "d", random.Random(3))
    assert sorted(distribution) == ["a", "d"]
    assert sum(distribution.values()) == 100


def test_audience_usually_favours_correct_key() -> None:
    favoured = 0
    for seed in range(200):
        distribution = audience_distribution(ANSWER_KEYS, "a", random.Random(seed))
        if max(distribution, key=lambda key: distribution[key]) == "a":
            favoured += 1
    assert favoured > 120


def test_friend_call_returns_friend_and_known_key() -> None:
    for seed in range(50):
        result = friend_call(ANSWER_KEYS, "d", random.Random(seed))
        assert result["friend"] in FRIEND_NAMES
        assert result["key"] in ANSWER_KEYS


def test_friend_call_is_mostly_right() -> None:
    correct = sum(
        1 for seed in range(200) if friend_call(ANSWER_KEYS, "b", random.Random(seed))["key"] == "b"
    )
    assert correct > 120


def test_friend_call_with_single_key_is_always_right() -> None:
    for seed in range(20):
        assert friend_call(["a"], "a", random.Random(seed))["key"] == "a"
