import logging
from collections import Counter
from datetime import date, timedelta
from typing import Any, Iterable, Mapping, Optional
from zoneinfo import ZoneInfo

from .dates import normalize
from .dates import today as current_day
from .schemas import ChartPoint, DailyObservation


logger = logging.getLogger("habitstats-series")

PERIOD_PRESETS: dict[str, int] = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_PERIOD = "30d"
DEFAULT_WINDOW_DAYS = PERIOD_PRESETS[DEFAULT_PERIOD]


def resolve_period(period: Optional[str]) -> str:
    key = str(period or "").strip().lower()
    if key in PERIOD_PRESETS:
        return key
    logger.debug("Unknown chart period=%r, falling back to %s", period, DEFAULT_PERIOD)
    return DEFAULT_PERIOD


def resolve_window_days(period: Optional[str]) -> int:
    return PERIOD_PRESETS[resolve_period(period)]


def format_label(day: date) -> str:
    return f"{day:%b} {day.day}"


def _as_observation(observation: Any) -> DailyObservation:
    if isinstance(observation, DailyObservation):
        return observation
    if isinstance(observation, Mapping):
        raw_day, raw_count = observation.get("date"), observation.get("count")
    else:
        raw_day, raw_count = observation
    return DailyObservation.model_validate(
        {"date": normalize(raw_day), "count": 0 if raw_count is None else raw_count}
    )


def _counts_by_day(observations: Iterable[Any]) -> dict[date, int]:
    by_day: dict[date, int] = {}
    for observation in observations:
        parsed = _as_observation(observation)
        by_day[parsed.date] = by_day.get(parsed.date, 0) + parsed.count
    return by_day


def densify(
    observations: Iterable[Any],
    window_days: int,
    anchor_day: Optional[Any] = None,
) -> list[ChartPoint]:
    """
    Expand sparse per-day counts into one point per day of the window ending
    at ``anchor_day`` (today by default). Days without an observation get 0.

    Observations may be ``DailyObservation`` models, ``{"date", "count"}``
    mappings or ``(day, count)`` pairs; a missing count is 0, other counts must
    be non-negative integers. Counts for the same day are summed.
    """
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days <= 0:
        raise ValueError(f"window_days must be a positive integer, got {window_days!r}")

    anchor = current_day() if anchor_day is None else normalize(anchor_day)
    by_day = _counts_by_day(observations)

    points: list[ChartPoint] = []
    for offset in range(window_days):
        day = anchor - timedelta(days=window_days - 1 - offset)
        points.append(
            ChartPoint(
                date=day.isoformat(),
                label=format_label(day),
                value=by_day.get(day, 0),
            )
        )
    return points


def build_daily_observations(values: Iterable[Any], tz: Optional[ZoneInfo] = None) -> list[DailyObservation]:
    """Group raw completion timestamps by calendar day into sparse rows."""
    counts = Counter(normalize(value, tz) for value in values)
    return [DailyObservation(date=day, count=counts[day]) for day in sorted(counts)]
