from datetime import date
from typing import Any, Iterable, Optional

from .dates import ONE_DAY, completion_set, normalize
from .dates import today as current_day


def _is_consecutive(prev_date: date, curr_date: date) -> bool:
    return (curr_date - prev_date).days == 1


def _current_streak_sorted(dates_desc: list[date], today: date) -> int:
    if not dates_desc:
        return 0

    yesterday = today - ONE_DAY
    latest = dates_desc[0]
    if latest != today and latest != yesterday:
        return 0

    expected = today if latest == today else yesterday
    streak = 0
    for completed_on in dates_desc:
        if completed_on != expected:
            break
        streak += 1
        expected -= ONE_DAY
    return streak


def _longest_streak_sorted(dates_asc: list[date]) -> int:
    if not dates_asc:
        return 0

    longest = 1
    current = 1
    for prev_date, curr_date in zip(dates_asc, dates_asc[1:]):
        if _is_consecutive(prev_date, curr_date):
            current += 1
        else:
            longest = max(longest, current)
            current = 1
    return max(longest, current)


def current_streak(dates: Iterable[Any], *, today: Optional[date] = None) -> int:
    """
    Consecutive completed days ending today, or yesterday when today is not
    done yet. The run is counted backwards day by day and stops at the first gap.
    """
    anchor = current_day() if today is None else normalize(today)
    return _current_streak_sorted(sorted(completion_set(dates), reverse=True), anchor)


def longest_streak(dates: Iterable[Any]) -> int:
    return _longest_streak_sorted(sorted(completion_set(dates)))


def calculate_streak_metrics(
    dates: Iterable[Any],
    *,
    today: Optional[date] = None,
) -> tuple[int, int, Optional[date]]:
    anchor = current_day() if today is None else normalize(today)
    dates_asc = sorted(completion_set(dates))
    if not dates_asc:
        return 0, 0, None

    current = _current_streak_sorted(dates_asc[::-1], anchor)
    best = _longest_streak_sorted(dates_asc)
    return current, best, dates_asc[-1]
