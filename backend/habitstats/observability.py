import json
import time
from typing import Any, Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_ctx(
    operation: str,
    habit_id: Optional[Any] = None,
    extra: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    context: dict[str, Any] = {"operation": operation}
    if habit_id is not None:
        context["habit_id"] = str(habit_id)
    if extra:
        for key, value in extra.items():
            if value is not None:
                context[key] = value
    return context


def log_ctx_json(context: dict[str, Any]) -> str:
    return json.dumps(context, separators=(",", ":"), ensure_ascii=False, default=str)


def duration_ms(started_at: float) -> int:
    return int((time.monotonic() - started_at) * 1000)
