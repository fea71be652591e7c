"""Supabase repository for tenant meal settings.

The ``meal_settings`` table holds one row per tenant, unique on ``tenant``.
Window times may be stored as ``text`` (``HH:MM``) or Postgres ``time``
(``HH:MM:SS``); seconds are dropped on read.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, time

from postgrest.exceptions import APIError
from supabase import Client

from food_requests.domain.meals import (
    MealType,
    MealWindowConfig,
    TenantMealSettings,
    format_clock_time,
    parse_clock_time,
)
from food_requests.services.meal_settings import MealSettingsRepository

_TABLE = "meal_settings"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseMealSettingsRepository(MealSettingsRepository):
    """Supabase implementation storing one settings row per tenant."""

    client: Client

    def get_settings(self, tenant: str) -> TenantMealSettings | None:
        """Return the settings row for a tenant."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("tenant", tenant)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_settings(response.data[0])

    def create_settings(
        self, tenant: str, meals: Mapping[MealType, MealWindowConfig]
    ) -> TenantMealSettings:
        """Insert the settings row for a tenant."""
        payload: dict[str, object] = {"tenant": tenant, "email_reports_enabled": False}
        for meal_type, config in meals.items():
            payload.update(_window_columns(meal_type, config))
        try:
            response = self.client.table(_TABLE).insert(payload).execute()
        except APIError as exc:
            if exc.code != _UNIQUE_VIOLATION:
                raise
            # Another request provisioned the tenant first.
            existing = self.get_settings(tenant)
            if existing is None:
                raise
            return existing
        if not response.data:
            raise RuntimeError("Failed to create meal settings")
        return _row_to_settings(response.data[0])

    def save_meal_window(
        self, tenant: str, meal_type: MealType, config: MealWindowConfig
    ) -> None:
        """Update the columns of one meal type."""
        payload = _window_columns(meal_type, config)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table(_TABLE).update(payload).eq("tenant", tenant).execute()

    def set_email_reports(self, tenant: str, enabled: bool) -> None:
        """Update the closing report flag."""
        self.client.table(_TABLE).update(
            {
                "email_reports_enabled": enabled,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("tenant", tenant).execute()

    def list_report_tenants(self) -> list[TenantMealSettings]:
        """Return tenants with closing reports enabled."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("email_reports_enabled", True)
            .execute()
        )
        return [_row_to_settings(row) for row in response.data or []]


def _window_columns(meal_type: MealType, config: MealWindowConfig) -> dict[str, object]:
    prefix = meal_type.value
    return {
        f"{prefix}_enabled": config.enabled,
        f"{prefix}_open_time": format_clock_time(config.open_time),
        f"{prefix}_close_time": format_clock_time(config.close_time),
        f"{prefix}_auto_switch": config.auto_switch,
    }


def _stored_time(value: object) -> time | None:
    if isinstance(value, str) and value.count(":") == 2:
        value = value.rsplit(":", 1)[0]
    return parse_clock_time(value)


def _row_to_settings(row: dict[str, object]) -> TenantMealSettings:
    meals = {}
    for meal_type in MealType:
        prefix = meal_type.value
        open_time = _stored_time(row.get(f"{prefix}_open_time"))
        close_time = _stored_time(row.get(f"{prefix}_close_time"))
        # Unreadable windows are left out and classify as not configured.
        if open_time is None or close_time is None:
            continue
        meals[meal_type] = MealWindowConfig(
            enabled=bool(row.get(f"{prefix}_enabled")),
            open_time=open_time,
            close_time=close_time,
            auto_switch=bool(row.get(f"{prefix}_auto_switch")),
        )
    updated_at = row.get("updated_at")
    return TenantMealSettings(
        tenant=str(row["tenant"]),
        meals=meals,
        email_reports_enabled=bool(row.get("email_reports_enabled")),
        updated_at=datetime.fromisoformat(updated_at)
        if isinstance(updated_at, str)
        else None,
    )
