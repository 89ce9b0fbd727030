"""
Streak rules:
- currentStreak: consecutive completed days counting backwards from today,
  or from yesterday when today has no completion yet
- longestStreak: maximum run of consecutive completed days ever achieved
- any missing day breaks a run; same-day duplicates count once
"""

import itertools
import random
from datetime import date, datetime, timedelta

import pytest

from habitstats.errors import InvalidDate
from habitstats.streak_logic import calculate_streak_metrics, current_streak, longest_streak


def _days_ago(today: date, *offsets: int) -> list[date]:
    return [today - timedelta(days=offset) for offset in offsets]


def test_empty_history_has_no_streaks(today):
    assert current_streak([], today=today) == 0
    assert longest_streak([]) == 0
    assert calculate_streak_metrics([], today=today) == (0, 0, None)


def test_three_days_ending_today(today):
    dates = _days_ago(today, 0, 1, 2)
    assert current_streak(dates, today=today) == 3
    assert longest_streak(dates) == 3


def test_single_completion_today(today):
    assert current_streak([today], today=today) == 1
    assert longest_streak([today]) == 1


def test_streak_still_alive_when_only_yesterday_is_done(today):
    dates = _days_ago(today, 1, 2, 3)
    assert current_streak(dates, today=today) == 3


def test_streak_broken_when_last_completion_two_days_ago(today):
    assert current_streak(_days_ago(today, 2), today=today) == 0
    assert longest_streak(_days_ago(today, 2)) == 1


def test_current_and_longest_differ_after_gap(today):
    dates = _days_ago(today, 0, 1, 5, 6, 7)
    assert current_streak(dates, today=today) == 2
    assert longest_streak(dates) == 3


def test_current_streak_does_not_resume_after_gap(today):
    dates = _days_ago(today, 0, 2, 3, 4)
    assert current_streak(dates, today=today) == 1


def test_longest_streak_counts_final_run(today):
    dates = _days_ago(today, 10, 8, 3, 2, 1, 0)
    assert longest_streak(dates) == 4


def test_longest_streak_across_month_and_year_boundaries():
    dates = [date(2025, 12, 30), date(2025, 12, 31), date(2026, 1, 1), date(2026, 1, 2)]
    assert longest_streak(dates) == 4
    leap = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert longest_streak(leap) == 3


def test_same_day_duplicates_do_not_break_runs(today):
    dates = [
        datetime.combine(today, datetime.min.time()).replace(hour=7),
        datetime.combine(today, datetime.min.time()).replace(hour=22),
        today - timedelta(days=1),
        (today - timedelta(days=1)).isoformat(),
        today - timedelta(days=2),
    ]
    assert current_streak(dates, today=today) == 3
    assert longest_streak(dates) == 3


def test_mixed_date_like_inputs(today):
    dates = [
        datetime(2026, 2, 13, 22, 0),
        "2026-02-12",
        date(2026, 2, 11),
        "2026-02-10T06:30:00Z",
    ]
    assert current_streak(dates, today=today) == 4


def test_today_accepts_datetime_anchor(today):
    dates = _days_ago(today, 0, 1)
    anchor = datetime.combine(today, datetime.min.time()).replace(hour=23, minute=59)
    assert current_streak(dates, today=anchor) == 2


def test_invalid_date_propagates(today):
    with pytest.raises(InvalidDate):
        current_streak([today, "not-a-date"], today=today)
    with pytest.raises(InvalidDate):
        longest_streak(["2026-02-30"])


def test_streaks_do_not_depend_on_input_order(today):
    dates = _days_ago(today, 0, 1, 2, 4, 5, 9, 10, 11, 12)
    expected_current = current_streak(dates, today=today)
    expected_longest = longest_streak(dates)

    rng = random.Random(20260213)
    for _ in range(20):
        shuffled = dates[:]
        rng.shuffle(shuffled)
        assert current_streak(shuffled, today=today) == expected_current
        assert longest_streak(shuffled) == expected_longest


def test_longest_is_never_shorter_than_current(today):
    offsets = range(8)
    for size in range(len(offsets) + 1):
        for subset in itertools.combinations(offsets, size):
            dates = _days_ago(today, *subset)
            assert longest_streak(dates) >= current_streak(dates, today=today)


def test_calculate_streak_metrics_reports_last_completed_date(today):
    dates = _days_ago(today, 1, 2, 6)
    current, best, last_completed = calculate_streak_metrics(dates, today=today)
    assert current == 2
    assert best == 2
    assert last_completed == today - timedelta(days=1)


def test_calculate_streak_metrics_broken_streak_keeps_history(today):
    dates = _days_ago(today, 3, 4, 5, 6)
    assert calculate_streak_metrics(dates, today=today) == (0, 4, today - timedelta(days=3))
