"""Argument checks run by resource methods before any network call."""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional

HISTORICAL_PERIODS = ("past_week", "past_month", "past_year")
AGGREGATION_INTERVALS = ("raw", "hourly", "daily", "weekly", "monthly")
ALERT_OPERATORS = (
    "greater_than",
    "less_than",
    "equals",
    "greater_than_or_equal",
    "less_than_or_equal",
)

MAX_CONDITION_VALUE = 1_000_000
MAX_COOLDOWN_MINUTES = 1440
MAX_STATION_RADIUS_METERS = 50000

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ValidationError(ValueError):
    """Raised when a resource method receives invalid arguments."""


def require_choice(value: str, choices: Iterable[str], label: str) -> str:
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(f"Invalid {label} {value!r}. Must be one of: {', '.join(choices)}")
    return value


def require_non_empty(value: Any, label: str) -> str:
    if not value or not isinstance(value, str):
        raise ValidationError(f"{label} must be a non-empty string")
    return value


def require_date(value: str, label: str) -> str:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"{label} must be formatted as YYYY-MM-DD, got {value!r}")
    return value


def require_positive_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{label} must be a positive integer, got {value!r}")
    return value


def require_state_code(state: Any) -> str:
    """Two-letter US state code, returned uppercased."""
    if not isinstance(state, str) or len(state) != 2 or not state.isalpha():
        raise ValidationError('State must be a 2-letter US state code (e.g., "CA", "TX")')
    return state.upper()


def require_in_range(value: Any, low: float, high: float, message: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not low <= value <= high:
        raise ValidationError(message)
    return value


def require_https_url(url: Any, label: str = "Webhook URL") -> str:
    require_non_empty(url, label)
    if not url.startswith("https://"):
        raise ValidationError(f"{label} must use HTTPS protocol")
    return url


def require_alert_name(name: Any) -> str:
    require_non_empty(name, "Alert name")
    if len(name) > 100:
        raise ValidationError("Alert name must be 1-100 characters")
    return name


def require_condition_value(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Condition value must be a number")
    if value <= 0 or value > MAX_CONDITION_VALUE:
        raise ValidationError("Condition value must be greater than 0 and less than or equal to 1,000,000")
    return value


def require_cooldown(minutes: Any) -> int:
    if isinstance(minutes, bool) or not isinstance(minutes, int) or not 0 <= minutes <= MAX_COOLDOWN_MINUTES:
        raise ValidationError("Cooldown minutes must be between 0 and 1440 (24 hours)")
    return minutes


def optional(value: Optional[Any], check, *args: Any) -> Optional[Any]:
    """Run ``check`` only when a value was given."""
    if value is None:
        return None
    return check(value, *args)
