from __future__ import annotations

import random
from collections.abc import Sequence

FRIEND_NAMES: tuple[str, ...] = (
    "Vasily Petrovich",
    "Anna Sergeevna",
    "Mikhail",
    "Olga",
    "Uncle Fyodor",
    "Grandma Nina",
)
AUDIENCE_BASE_MAX = 44
AUDIENCE_CORRECT_BONUS = (40, 60)
AUDIENCE_CORRECT_BONUS_CHANCE = 0.8
FRIEND_CORRECT_CHANCE = 0.8


def fifty_fifty(keys: Sequence[str], correct_key: str, rng: random.Random) -> list[str]:
    wrong_keys = [key for key in keys if key != correct_key]
    return sorted([correct_key, rng.choice(wrong_keys)])


def _to_percentages(weights: dict[str, int]) -> dict[str, int]:
    total = sum(weights.values())
    raw = {key: weight * 100 / total for key, weight in weights.items()}
    shares = {key: int(value) for key, value in raw.items()}
    remainder = 100 - sum(shares.values())
    by_fraction = sorted(raw, key=lambda key: (raw[key] - shares[key], key), reverse=True)
    for key in by_fraction[:remainder]:
        shares[key] += 1
    return shares


def audience_distribution(
    keys: Sequence[str],
    correct_key: str,
    rng: random.Random,
) -> dict[str, int]:
    """Simulated audience vote in percent over ``keys``, summing to 100.

    Every key draws a base share; most of the time the correct key gets an
    extra bonus on top, so the audience is usually but not always right.
    """
    weights = {key: rng.randint(0, AUDIENCE_BASE_MAX) for key in sorted(keys)}
    if rng.random() < AUDIENCE_CORRECT_BONUS_CHANCE:
        weights[correct_key] += rng.randint(*AUDIENCE_CORRECT_BONUS)
    if sum(weights.values()) == 0:
        weights[correct_key] = 1
    return _to_percentages(weights)


def friend_call(
    keys: Sequence[str],
    correct_key: str,
    rng: random.Random,
) -> dict[str, str]:
    wrong_keys = [key for key in keys if key != correct_key]
    key = correct_key
    if wrong_keys and rng.random() >= FRIEND_CORRECT_CHANCE:
        key = rng.choice(wrong_keys)
    return {"friend": rng.choice(FRIEND_NAMES), "key": key}
