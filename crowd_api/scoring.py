"""Busyness score computation.

A score of 10 means a destination is at its rated capacity. Scores above 10
are valid and signal over-capacity.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

SCALE = Decimal(10)
_PRECISION = Decimal("0.01")


def has_capacity(max_people: int | None) -> bool:
    """Return whether ``max_people`` can be used to compute a score."""

    return max_people is not None and max_people > 0


def busyness_score(raw_count: int, max_people: int) -> float:
    """Return ``raw_count / max_people * 10`` rounded to two decimals.

    Rounding is half away from zero and carried out on decimals, so ``0.125``
    becomes ``0.13`` the same way SQL ``ROUND`` treats exact values.

    Raises
    ------
    ValueError
        If ``max_people`` is missing or not positive, or ``raw_count`` is negative.
    """

    if not has_capacity(max_people):
        raise ValueError(f"max_people must be a positive number, got {max_people!r}")
    if raw_count < 0:
        raise ValueError(f"raw_count must not be negative, got {raw_count!r}")

    score = Decimal(raw_count) * SCALE / Decimal(max_people)
    return float(score.quantize(_PRECISION, rounding=ROUND_HALF_UP))


__all__ = ["busyness_score", "has_capacity"]
