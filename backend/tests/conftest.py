import os
from datetime import date

import pytest

# Pin the calendar reference before the package reads its settings
os.environ["STATS_TIMEZONE"] = "UTC"
os.environ["LOG_LEVEL"] = "info"
os.environ["CHART_DEFAULT_PERIOD"] = "30d"


FIXED_TODAY = date(2026, 2, 13)


@pytest.fixture
def today() -> date:
    return FIXED_TODAY
