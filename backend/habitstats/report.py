import logging
import time
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from .dates import completion_set, normalize
from .dates import today as current_day
from .observability import duration_ms, log_ctx, log_ctx_json
from .rates import completion_percentage
from .schemas import CompletionChart, HabitMetadata, HabitStats
from .series import PERIOD_PRESETS, build_daily_observations, densify, resolve_period
from .streak_logic import calculate_streak_metrics


logger = logging.getLogger("habitstats-report")


def _coerce_habit(habit: Union[HabitMetadata, Mapping[str, Any]]) -> HabitMetadata:
    if isinstance(habit, HabitMetadata):
        return habit
    return HabitMetadata.model_validate(dict(habit))


def summarize_habit(
    habit: Union[HabitMetadata, Mapping[str, Any]],
    completions: Iterable[Any],
    *,
    today: Optional[date] = None,
) -> HabitStats:
    """
    Streak and completion-rate summary for one habit.

    Every habit is treated as daily cadence; ``habit.type`` is carried along
    but does not change the streak rules.
    """
    started_at = time.monotonic()
    meta = _coerce_habit(habit)
    anchor = current_day() if today is None else normalize(today)

    completed_days = completion_set(completions)
    current, longest, last_completed = calculate_streak_metrics(completed_days, today=anchor)
    percentage = completion_percentage(len(completed_days), meta.createdAt, today=anchor)

    stats = HabitStats(
        currentStreak=current,
        longestStreak=longest,
        completionPercentage=percentage,
        totalCompletions=len(completed_days),
        lastCompletedDate=last_completed.isoformat() if last_completed else None,
    )
    logger.debug(
        "Habit summary context=%s",
        log_ctx_json(
            log_ctx(
                "summarize_habit",
                habit_id=meta.id,
                extra={
                    "habit_type": meta.type,
                    "today": anchor.isoformat(),
                    "completions": stats.totalCompletions,
                    "current_streak": stats.currentStreak,
                    "longest_streak": stats.longestStreak,
                    "duration_ms": duration_ms(started_at),
                },
            )
        ),
    )
    return stats


def build_completion_chart(
    completions: Iterable[Any],
    period: Optional[str] = None,
    *,
    anchor_day: Optional[Any] = None,
) -> CompletionChart:
    """Dense per-day completion counts across all supplied completions."""
    started_at = time.monotonic()
    resolved_period = resolve_period(period)
    window_days = PERIOD_PRESETS[resolved_period]
    anchor = current_day() if anchor_day is None else normalize(anchor_day)

    observations = build_daily_observations(completions)
    points = densify(observations, window_days, anchor)
    total = sum(point.value for point in points)

    logger.debug(
        "Completion chart context=%s",
        log_ctx_json(
            log_ctx(
                "build_completion_chart",
                extra={
                    "period": resolved_period,
                    "anchor_day": anchor.isoformat(),
                    "observed_days": len(observations),
                    "total": total,
                    "duration_ms": duration_ms(started_at),
                },
            )
        ),
    )
    return CompletionChart(
        period=resolved_period,
        days=window_days,
        startDate=points[0].date,
        endDate=points[-1].date,
        points=points,
        total=total,
    )
