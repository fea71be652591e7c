"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_requests.adapters.supabase_food_request_repository import (
    SupabaseFoodRequestRepository,
)
from food_requests.adapters.supabase_meal_settings_repository import (
    SupabaseMealSettingsRepository,
)
from food_requests.adapters.webhook_report_client import HttpxWebhookReportNotifier
from food_requests.config import Settings
from food_requests.services.cache import InMemoryCache
from food_requests.services.clock import ZoneClock
from food_requests.services.food_requests import FoodRequestService
from food_requests.services.meal_settings import MealSettingsService
from food_requests.services.reports import MealReportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_settings_service: MealSettingsService
    food_request_service: FoodRequestService
    report_service: MealReportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    settings_repository = SupabaseMealSettingsRepository(supabase_client)
    request_repository = SupabaseFoodRequestRepository(supabase_client)
    clock = ZoneClock(resolved_settings.timezone)
    meal_settings_service = MealSettingsService(settings_repository)
    food_request_service = FoodRequestService(
        settings_service=meal_settings_service,
        repository=request_repository,
        clock=clock,
    )
    notifier = None
    if resolved_settings.report_webhook_url:
        notifier = HttpxWebhookReportNotifier.create(
            url=resolved_settings.report_webhook_url,
            token=resolved_settings.report_webhook_token,
        )
    report_service = MealReportService(
        settings_service=meal_settings_service,
        request_repository=request_repository,
        clock=clock,
        sent_cache=InMemoryCache(),
        notifier=notifier,
    )

    async def close_resources() -> None:
        if notifier is not None:
            await notifier.close()

    return AppContainer(
        settings=resolved_settings,
        meal_settings_service=meal_settings_service,
        food_request_service=food_request_service,
        report_service=report_service,
        close_resources=close_resources,
    )
