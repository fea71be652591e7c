"""Meal window eligibility rules.

Every caller that needs to know whether a meal accepts requests goes through
these functions: worker submission, admin single and bulk submission, the
admin settings board and the closing report dispatch. They are pure: the
caller supplies the configuration and the local wall-clock time.
"""

from collections.abc import Mapping
from datetime import time

from food_requests.domain.meals import MealStatus, MealType, MealWindowConfig

_OPEN_STATUSES = frozenset({MealStatus.AUTO_OPEN, MealStatus.MANUAL_OPEN})


def classify(config: MealWindowConfig | None, now: time) -> MealStatus:
    """Return the status of a meal window at the given local time."""
    if config is None:
        return MealStatus.NOT_CONFIGURED
    if config.auto_switch:
        if _in_window(config, now):
            return MealStatus.AUTO_OPEN
        return MealStatus.AUTO_CLOSED
    if config.enabled:
        return MealStatus.MANUAL_OPEN
    return MealStatus.DISABLED


def is_open(status: MealStatus) -> bool:
    """Return True when the status accepts new requests."""
    return status in _OPEN_STATUSES


def is_eligible_for_new_submission(
    config: MealWindowConfig | None, now: time, already_submitted_today: bool
) -> bool:
    """Return True when a worker may submit a new request for the meal."""
    if already_submitted_today:
        return False
    return is_open(classify(config, now))


def classify_all(
    configs: Mapping[MealType, MealWindowConfig], now: time
) -> dict[MealType, MealStatus]:
    """Classify every meal type, treating missing entries as unconfigured."""
    return {meal_type: classify(configs.get(meal_type), now) for meal_type in MealType}


def all_meals_blocked(configs: Mapping[MealType, MealWindowConfig], now: time) -> bool:
    """Return True when no meal type currently accepts requests."""
    return not any(is_open(status) for status in classify_all(configs, now).values())


def is_closing_time(
    config: MealWindowConfig | None, now: time, tolerance_minutes: int = 1
) -> bool:
    """Return True from the close time until ``tolerance_minutes`` after it."""
    if config is None:
        return False
    elapsed = _minute_of_day(now) - _minute_of_day(config.close_time)
    return 0 <= elapsed <= tolerance_minutes


def _in_window(config: MealWindowConfig, now: time) -> bool:
    # Close time is exclusive; seconds are ignored.
    minute = _minute_of_day(now)
    return (
        _minute_of_day(config.open_time) <= minute < _minute_of_day(config.close_time)
    )


def _minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute
