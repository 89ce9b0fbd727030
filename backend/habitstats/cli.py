import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from .config import parse_log_level, settings
from .dates import normalize
from .errors import HabitStatsError, InputValidationError, to_error_payload
from .observability import LOG_FORMAT
from .report import build_completion_chart, summarize_habit


logger = logging.getLogger("habitstats-cli")

REPORT_INPUT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["habits"],
    "properties": {
        "today": {"type": "string"},
        "period": {"type": "string"},
        "habits": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "createdAt", "completions"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": ["string", "null"]},
                    "type": {"enum": ["daily", "weekly"]},
                    "createdAt": {"type": "string"},
                    "completions": {
                        "type": "array",
                        "items": {"type": "string"},
                    },
                },
            },
        },
    },
}
REPORT_INPUT_VALIDATOR = Draft202012Validator(REPORT_INPUT_SCHEMA)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_UNREADABLE = 2


def validate_report_input(document: Any) -> None:
    try:
        REPORT_INPUT_VALIDATOR.validate(document)
    except JsonSchemaValidationError as exc:
        field_path = ".".join(str(p) for p in exc.path) or "$"
        raise InputValidationError(f"{field_path}: {exc.message}") from exc


def build_report(
    document: dict[str, Any],
    *,
    today: Optional[str] = None,
    period: Optional[str] = None,
) -> dict[str, Any]:
    validate_report_input(document)

    raw_today = today or document.get("today")
    anchor = normalize(raw_today) if raw_today else None
    chart_period = period or document.get("period") or settings.CHART_DEFAULT_PERIOD

    habits_out: list[dict[str, Any]] = []
    all_completions: list[str] = []
    for habit in document["habits"]:
        completions = habit["completions"]
        stats = summarize_habit(habit, completions, today=anchor)
        habits_out.append(
            {
                "id": habit["id"],
                "name": habit.get("name"),
                "type": habit.get("type", "daily"),
                "stats": stats.model_dump(),
            }
        )
        all_completions.extend(completions)

    chart = build_completion_chart(all_completions, chart_period, anchor_day=anchor)
    return {"habits": habits_out, "chart": chart.model_dump()}


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="habitstats-report",
        description="Compute streaks, completion rates and a gap-filled chart from a JSON habit export.",
    )
    parser.add_argument("input", help="path to the JSON export, or - for stdin")
    parser.add_argument("--today", default=None, help="anchor day as YYYY-MM-DD (default: current day)")
    parser.add_argument("--period", default=None, help="chart window: 7d, 30d or 90d")
    parser.add_argument("--log-level", default=None, help="overrides LOG_LEVEL")
    return parser.parse_args(argv)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _fail(error: HabitStatsError) -> int:
    print(json.dumps(to_error_payload(error), ensure_ascii=False), file=sys.stderr)
    return EXIT_INVALID_INPUT


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    level = parse_log_level(args.log_level) if args.log_level else settings.log_level()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    try:
        raw = _read_input(args.input)
    except OSError as exc:
        logger.error("REPORT_INPUT_UNREADABLE path=%s reason=%s", args.input, type(exc).__name__)
        return EXIT_UNREADABLE

    try:
        document = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError:
        logger.error("REPORT_INPUT_INVALID reason=utf8_decode")
        return _fail(InputValidationError("$: input is not valid UTF-8"))
    except json.JSONDecodeError as exc:
        logger.error("REPORT_INPUT_INVALID reason=json_decode")
        return _fail(InputValidationError(f"$: invalid JSON at line {exc.lineno} column {exc.colno}"))

    try:
        report = build_report(document, today=args.today, period=args.period)
    except HabitStatsError as exc:
        logger.error("REPORT_FAILED code=%s details=%s", exc.code, exc.details)
        return _fail(exc)

    print(json.dumps(report, ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
