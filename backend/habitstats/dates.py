"""
Calendar-day normalization.

Every date that reaches the streak, rate or series code goes through
``normalize`` first, so all comparisons happen between plain ``date`` values
taken in a single reference zone (``settings.STATS_TIMEZONE``).
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional
from zoneinfo import ZoneInfo

from .config import settings
from .errors import InvalidDate


ONE_DAY = timedelta(days=1)


def _resolve_tz(tz: Optional[ZoneInfo]) -> ZoneInfo:
    return tz if tz is not None else settings.reference_tz()


def _from_datetime(value: datetime, tz: ZoneInfo) -> date:
    if value.tzinfo is None or value.utcoffset() is None:
        return value.date()
    return value.astimezone(tz).date()


def _parse_string(raw: str, tz: ZoneInfo) -> date:
    candidate = raw.strip()
    if not candidate:
        raise InvalidDate(raw, "empty string")
    if len(candidate) == 10:
        try:
            return date.fromisoformat(candidate)
        except ValueError:
            pass
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise InvalidDate(raw, "must be ISO-8601 date or datetime") from exc
    return _from_datetime(parsed, tz)


def normalize(value: Any, tz: Optional[ZoneInfo] = None) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return _from_datetime(value, _resolve_tz(tz))
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise InvalidDate(value, "unsupported type")
    if isinstance(value, str):
        return _parse_string(value, _resolve_tz(tz))
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=_resolve_tz(tz)).date()
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidDate(value, "timestamp out of range") from exc
    raise InvalidDate(value, "unsupported type")


def today(tz: Optional[ZoneInfo] = None) -> date:
    return datetime.now(_resolve_tz(tz)).date()


def days_between(later: Any, earlier: Any) -> int:
    return (normalize(later) - normalize(earlier)).days


def completion_set(values: Iterable[Any], tz: Optional[ZoneInfo] = None) -> frozenset[date]:
    """Normalize raw completion values and collapse same-day duplicates."""
    return frozenset(normalize(value, tz) for value in values)
