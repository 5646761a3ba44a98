"""Quality-check rules.

A check passes when the overall grade is not ``rejected`` and both
stitching and finishing are rated at least ``PASSING_RATING``.
Measurement accuracy and design adherence only feed the score.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from modules.production.constants import PASSING_RATING, OverallQuality

_CENTS = Decimal("0.01")


def quality_check_passed(
    overall_quality: str, stitching_quality: int, finishing_quality: int
) -> bool:
    return (
        overall_quality != OverallQuality.REJECTED
        and stitching_quality >= PASSING_RATING
        and finishing_quality >= PASSING_RATING
    )


def check_score(
    stitching_quality: int,
    finishing_quality: int,
    measurement_accuracy: int,
    design_adherence: int,
) -> Decimal:
    """Mean of the four numeric ratings, to two decimals."""
    total = stitching_quality + finishing_quality + measurement_accuracy + design_adherence
    return (Decimal(total) / Decimal(4)).quantize(_CENTS, rounding=ROUND_HALF_UP)
