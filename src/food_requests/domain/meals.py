"""Domain models for meal windows and food requests."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from uuid import UUID

_CLOCK_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


class MealType(StrEnum):
    """Meals that accept requests."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealStatus(StrEnum):
    """Derived state of a meal window at a point in time."""

    AUTO_OPEN = "auto-open"
    AUTO_CLOSED = "auto-closed"
    MANUAL_OPEN = "manual-open"
    DISABLED = "disabled"
    NOT_CONFIGURED = "not-configured"


@dataclass(frozen=True)
class MealWindowConfig:
    """Request window configuration for a single meal type."""

    enabled: bool
    open_time: time
    close_time: time
    auto_switch: bool = False


@dataclass(frozen=True)
class TenantMealSettings:
    """All meal settings stored for one tenant."""

    tenant: str
    meals: Mapping[MealType, MealWindowConfig]
    email_reports_enabled: bool = False
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FoodRequestRecord:
    """A persisted meal request for one worker on one day."""

    id: UUID
    tenant: str
    worker_id: UUID
    meal_type: MealType
    request_date: date
    submitted_at: datetime
    submitted_by: str


@dataclass(frozen=True)
class MealSummary:
    """Request counts per meal type for a day."""

    day: date
    counts: Mapping[MealType, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())


DEFAULT_MEAL_WINDOWS: Mapping[MealType, MealWindowConfig] = {
    MealType.BREAKFAST: MealWindowConfig(
        enabled=False, open_time=time(7, 0), close_time=time(9, 0)
    ),
    MealType.LUNCH: MealWindowConfig(
        enabled=True, open_time=time(12, 0), close_time=time(14, 0)
    ),
    MealType.DINNER: MealWindowConfig(
        enabled=False, open_time=time(18, 0), close_time=time(20, 0)
    ),
}


def parse_clock_time(value: object) -> time | None:
    """Parse an ``HH:MM`` 24-hour string, returning None when malformed."""
    if not isinstance(value, str):
        return None
    match = _CLOCK_TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    return time(int(match.group(1)), int(match.group(2)))


def format_clock_time(value: time) -> str:
    """Format a time as a zero-padded ``HH:MM`` string."""
    return value.strftime("%H:%M")
