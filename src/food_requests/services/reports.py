"""Closing reports sent when a meal window ends, and the end-of-day summary."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from food_requests.domain.meals import (
    FoodRequestRecord,
    MealStatus,
    MealType,
    TenantMealSettings,
)
from food_requests.services.cache import Cache
from food_requests.services.clock import Clock
from food_requests.services.food_requests import FoodRequestRepository
from food_requests.services.meal_settings import MealSettingsService
from food_requests.services.meal_window import classify, is_closing_time

SENT_REPORT_TTL_SECONDS = 25 * 60 * 60

_INACTIVE_STATUSES = {MealStatus.DISABLED, MealStatus.NOT_CONFIGURED}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MealReport:
    """Requests collected for one meal of one day."""

    tenant: str
    meal_type: MealType
    day: date
    closed_at: datetime
    requests: list[FoodRequestRecord]

    @property
    def total_count(self) -> int:
        return len(self.requests)


@dataclass(frozen=True)
class DailyReport:
    """Requests collected for every meal of one day."""

    tenant: str
    day: date
    sent_at: datetime
    requests: dict[MealType, list[FoodRequestRecord]]

    @property
    def counts(self) -> dict[MealType, int]:
        return {
            meal_type: len(self.requests.get(meal_type, [])) for meal_type in MealType
        }

    @property
    def total_count(self) -> int:
        return sum(self.counts.values())


class ReportNotifier(Protocol):
    """Delivery channel for closing reports."""

    async def send_meal_report(self, report: MealReport) -> None:
        """Deliver a closing report."""

    async def send_daily_report(self, report: DailyReport) -> None:
        """Deliver an end-of-day summary."""


@dataclass
class MealReportService:
    """Builds and delivers closing reports and daily summaries.

    Each closing report goes out once per tenant, meal and day, and each daily
    summary once per tenant and day. Callers trigger both on a schedule.
    """

    settings_service: MealSettingsService
    request_repository: FoodRequestRepository
    clock: Clock
    sent_cache: Cache
    notifier: ReportNotifier | None = None

    async def dispatch_closing_reports(self) -> list[MealReport]:
        """Send reports for meals closing now; return the ones delivered."""
        now = self.clock.now()
        delivered = []
        for settings in self.settings_service.list_report_tenants():
            for meal_type in self._closing_meals(settings, now):
                report = await self._deliver(settings.tenant, meal_type, now)
                if report is not None:
                    delivered.append(report)
        return delivered

    def build_report(
        self, tenant: str, meal_type: MealType, now: datetime
    ) -> MealReport:
        """Collect the day's requests for a meal."""
        requests = self.request_repository.list_requests(tenant, now.date(), meal_type)
        return MealReport(
            tenant=tenant,
            meal_type=meal_type,
            day=now.date(),
            closed_at=now,
            requests=requests,
        )

    async def dispatch_daily_reports(self) -> list[DailyReport]:
        """Send today's summary to every reporting tenant that had requests."""
        now = self.clock.now()
        delivered = []
        for settings in self.settings_service.list_report_tenants():
            report = await self._deliver_daily(settings.tenant, now)
            if report is not None:
                delivered.append(report)
        return delivered

    def build_daily_report(self, tenant: str, now: datetime) -> DailyReport:
        """Collect the day's requests for every meal."""
        return DailyReport(
            tenant=tenant,
            day=now.date(),
            sent_at=now,
            requests={
                meal_type: self.request_repository.list_requests(
                    tenant, now.date(), meal_type
                )
                for meal_type in MealType
            },
        )

    async def _deliver_daily(self, tenant: str, now: datetime) -> DailyReport | None:
        key = f"daily-report:{tenant}:{now.date().isoformat()}"
        if self.sent_cache.get(key) is not None:
            return None
        if self.notifier is None:
            _logger.warning("No report notifier configured: tenant=%s", tenant)
            return None
        report = self.build_daily_report(tenant, now)
        if report.total_count == 0:
            _logger.info("Daily report skipped, no requests: tenant=%s", tenant)
            return None
        try:
            await self.notifier.send_daily_report(report)
        except Exception:
            _logger.exception("Failed to send daily report: tenant=%s", tenant)
            return None
        self.sent_cache.set(key, now.isoformat(), ttl_seconds=SENT_REPORT_TTL_SECONDS)
        _logger.info(
            "Daily report sent: tenant=%s requests=%s", tenant, report.total_count
        )
        return report

    def _closing_meals(
        self, settings: TenantMealSettings, now: datetime
    ) -> list[MealType]:
        closing = []
        for meal_type in MealType:
            config = settings.meals.get(meal_type)
            if classify(config, now.time()) in _INACTIVE_STATUSES:
                continue
            if is_closing_time(config, now.time()):
                closing.append(meal_type)
        return closing

    async def _deliver(
        self, tenant: str, meal_type: MealType, now: datetime
    ) -> MealReport | None:
        key = f"report:{tenant}:{meal_type}:{now.date().isoformat()}"
        if self.sent_cache.get(key) is not None:
            return None
        if self.notifier is None:
            _logger.warning(
                "No report notifier configured: tenant=%s meal=%s", tenant, meal_type
            )
            return None
        report = self.build_report(tenant, meal_type, now)
        try:
            await self.notifier.send_meal_report(report)
        except Exception:
            _logger.exception(
                "Failed to send closing report: tenant=%s meal=%s", tenant, meal_type
            )
            return None
        self.sent_cache.set(key, now.isoformat(), ttl_seconds=SENT_REPORT_TTL_SECONDS)
        _logger.info(
            "Closing report sent: tenant=%s meal=%s requests=%s",
            tenant,
            meal_type,
            report.total_count,
        )
        return report
