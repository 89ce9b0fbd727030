import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_log_level(raw_value: str) -> int:
    level = logging.getLevelName(raw_value.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


class Settings(BaseSettings):
    LOG_LEVEL: str = "info"

    # Calendar
    STATS_TIMEZONE: str = "UTC"

    # Charts
    CHART_DEFAULT_PERIOD: str = "30d"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def reference_tz(self) -> ZoneInfo:
        name = self.STATS_TIMEZONE.strip() or "UTC"
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown STATS_TIMEZONE: {name}") from exc

    def log_level(self) -> int:
        return parse_log_level(self.LOG_LEVEL)


settings = Settings()
