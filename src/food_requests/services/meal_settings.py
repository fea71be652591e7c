"""Meal window settings service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol

from food_requests.domain.errors import (
    AutoSwitchActiveError,
    InvalidMealSettingsError,
    InvalidTenantError,
)
from food_requests.domain.meals import (
    DEFAULT_MEAL_WINDOWS,
    MealType,
    MealWindowConfig,
    TenantMealSettings,
    parse_clock_time,
)

_RESERVED_TENANTS = {"main"}

_logger = logging.getLogger(__name__)


class MealSettingsRepository(Protocol):
    """Persistence interface for tenant meal settings."""

    def get_settings(self, tenant: str) -> TenantMealSettings | None:
        """Return the stored settings for a tenant, if any."""

    def create_settings(
        self, tenant: str, meals: Mapping[MealType, MealWindowConfig]
    ) -> TenantMealSettings:
        """Create and return the settings row for a tenant."""

    def save_meal_window(
        self, tenant: str, meal_type: MealType, config: MealWindowConfig
    ) -> None:
        """Persist the window configuration of one meal type."""

    def set_email_reports(self, tenant: str, enabled: bool) -> None:
        """Persist the closing report flag."""

    def list_report_tenants(self) -> list[TenantMealSettings]:
        """Return settings of tenants with closing reports enabled."""


def validate_tenant(tenant: str) -> str:
    """Return the normalized tenant name or raise if it is unusable."""
    cleaned = tenant.strip() if tenant else ""
    if not cleaned or cleaned in _RESERVED_TENANTS:
        raise InvalidTenantError("Company name is missing, login again.")
    return cleaned


@dataclass
class MealSettingsService:
    """Service for reading and changing meal windows."""

    repository: MealSettingsRepository

    def get_settings(self, tenant: str) -> TenantMealSettings:
        """Return tenant settings, provisioning defaults on first access."""
        tenant = validate_tenant(tenant)
        existing = self.repository.get_settings(tenant)
        if existing is not None:
            return existing
        _logger.info("Provisioning default meal settings: tenant=%s", tenant)
        return self.repository.create_settings(tenant, DEFAULT_MEAL_WINDOWS)

    def update_meal_settings(
        self,
        tenant: str,
        meal_type: MealType,
        open_time: str,
        close_time: str,
        auto_switch: bool,
    ) -> MealWindowConfig:
        """Change the window times and mode of a meal type."""
        parsed_open = parse_clock_time(open_time)
        parsed_close = parse_clock_time(close_time)
        if parsed_open is None or parsed_close is None:
            raise InvalidMealSettingsError(
                "Invalid time format. Please use HH:MM format (24-hour)."
            )
        if parsed_open >= parsed_close:
            raise InvalidMealSettingsError(
                f"{meal_type} open time must be earlier than close time"
            )
        settings = self.get_settings(tenant)
        updated = replace(
            _current_window(settings, meal_type),
            open_time=parsed_open,
            close_time=parsed_close,
            auto_switch=auto_switch,
        )
        self.repository.save_meal_window(settings.tenant, meal_type, updated)
        _logger.info(
            "Updated meal window: tenant=%s meal=%s open=%s close=%s auto=%s",
            settings.tenant,
            meal_type,
            open_time,
            close_time,
            auto_switch,
        )
        return updated

    def toggle_enabled(self, tenant: str, meal_type: MealType) -> bool:
        """Flip the manual switch of a meal type and return the new value."""
        settings = self.get_settings(tenant)
        current = _current_window(settings, meal_type)
        if current.auto_switch:
            raise AutoSwitchActiveError(
                f"{meal_type} follows its time window; "
                "disable auto switch before toggling manually"
            )
        updated = replace(current, enabled=not current.enabled)
        self.repository.save_meal_window(settings.tenant, meal_type, updated)
        _logger.info(
            "Toggled meal requests: tenant=%s meal=%s enabled=%s",
            settings.tenant,
            meal_type,
            updated.enabled,
        )
        return updated.enabled

    def toggle_email_reports(self, tenant: str) -> bool:
        """Flip closing report delivery and return the new value."""
        settings = self.get_settings(tenant)
        enabled = not settings.email_reports_enabled
        self.repository.set_email_reports(settings.tenant, enabled)
        return enabled

    def list_report_tenants(self) -> list[TenantMealSettings]:
        """Return tenants that receive closing reports."""
        return self.repository.list_report_tenants()


def _current_window(
    settings: TenantMealSettings, meal_type: MealType
) -> MealWindowConfig:
    return settings.meals.get(meal_type) or DEFAULT_MEAL_WINDOWS[meal_type]
