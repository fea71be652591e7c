"""Wall-clock abstraction."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Return the current time in the tenant's timezone."""


@dataclass
class ZoneClock(Clock):
    """Clock that reads system time in a fixed timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))
