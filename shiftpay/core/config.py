# shiftpay/core/config.py

import os
from pathlib import Path
from typing import Final


# ==========================
# Environment
# ==========================

#: True when running with PRODUCTION=true.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: SQLAlchemy URL for the shift database.
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite:///./shiftpay.db")

#: Default location of the wage/bonus configuration file.
#: Overridden per call by WAGE_CONFIG_PATH, read at load time.
DEFAULT_WAGE_CONFIG_PATH: Final[Path] = Path("data/wage_bonuses.json")

#: Name of the environment variable pointing at the wage/bonus file.
WAGE_CONFIG_PATH_ENV: Final[str] = "WAGE_CONFIG_PATH"


# ==========================
# Date and time formats
# ==========================

#: Format for bonus window times, e.g. "18:00".
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Canonical storage format for shift timestamps. Lexical order equals
#: chronological order.
DATETIME_FORMAT_SQL: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Accepted input formats for shift timestamps, tried in order.
#: First match wins.
SHIFT_DATETIME_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d-%m-%Y %H:%M:%S",
    "%d-%m-%Y %H:%M",
)

#: Formats without a year ("23-12 22:00"). The year of the reference date is used.
SHIFT_DATETIME_FORMATS_NO_YEAR: Final[tuple[str, ...]] = (
    "%d-%m %H:%M",
    "%d-%m %H:%M:%S",
)

#: String that means "end of the day" in a bonus window, e.g. "24:00".
#: The window then runs to midnight of the next day.
TIME_END_OF_DAY_STRING: Final[str] = "24:00"

#: Time of day a reporting period ends on its last day (inclusive to the minute).
PERIOD_END_HOUR: Final[int] = 23
PERIOD_END_MINUTE: Final[int] = 59
