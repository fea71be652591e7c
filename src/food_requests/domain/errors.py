"""Errors raised by food request services."""


class FoodRequestError(Exception):
    """Base class for rule violations surfaced to API callers."""


class InvalidTenantError(FoodRequestError):
    """Raised when a tenant name is missing or reserved."""


class InvalidMealSettingsError(FoodRequestError):
    """Raised when a meal window update has invalid times."""


class AutoSwitchActiveError(FoodRequestError):
    """Raised when toggling a meal whose window is clock-driven."""


class MealClosedError(FoodRequestError):
    """Raised when a meal does not currently accept requests."""


class DuplicateSubmissionError(FoodRequestError):
    """Raised when a worker already requested the meal today."""
