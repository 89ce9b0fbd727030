from typing import Any, Optional


class HabitStatsError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class InvalidDate(HabitStatsError):
    """Raised when a value cannot be interpreted as a calendar date."""

    def __init__(self, value: Any, reason: Optional[str] = None):
        details: dict[str, Any] = {"value": repr(value)}
        if reason:
            details["issue"] = reason
        super().__init__(code="INVALID_DATE", message="Некорректная дата", details=details)
        self.value = value


class InputValidationError(HabitStatsError):
    def __init__(self, issue: str, schema: str = "report-input"):
        super().__init__(
            code="VALIDATION_FAILED",
            message="Некорректные данные",
            details={"schema": schema, "issue": issue},
        )


def to_error_payload(exc: HabitStatsError) -> dict:
    return {
        "error": {
            "code": exc.code,
            "message": exc.message,
            "details": exc.details,
        }
    }
