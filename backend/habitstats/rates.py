from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from .dates import days_between, normalize
from .dates import today as current_day


def round_half_up(numerator: int, denominator: int) -> int:
    return int((Decimal(numerator) / Decimal(denominator)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def completion_percentage(
    completion_count: int,
    created_at: Any,
    *,
    today: Optional[date] = None,
) -> int:
    """
    Share of days since the habit was created (both ends inclusive) that have
    a completion, rounded half-up to a whole percent.

    The result is not clamped: migrated or duplicated data can push it over 100.
    """
    if completion_count <= 0:
        return 0

    anchor = current_day() if today is None else normalize(today)
    total_possible_days = days_between(anchor, created_at) + 1
    if total_possible_days <= 0:
        return 0

    return round_half_up(completion_count * 100, total_possible_days)
