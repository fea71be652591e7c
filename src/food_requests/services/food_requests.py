"""Food request submission service."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from food_requests.domain.errors import DuplicateSubmissionError, MealClosedError
from food_requests.domain.meals import (
    FoodRequestRecord,
    MealStatus,
    MealSummary,
    MealType,
    MealWindowConfig,
    format_clock_time,
)
from food_requests.services.clock import Clock
from food_requests.services.meal_settings import MealSettingsService, validate_tenant
from food_requests.services.meal_window import (
    all_meals_blocked,
    classify,
    is_eligible_for_new_submission,
    is_open,
)

SUBMITTED_BY_WORKER = "worker"
SUBMITTED_BY_ADMIN = "admin"

_logger = logging.getLogger(__name__)


class FoodRequestRepository(Protocol):
    """Persistence interface for food requests."""

    def has_request(
        self, tenant: str, worker_id: UUID, meal_type: MealType, request_date: date
    ) -> bool:
        """Return True if the worker already requested the meal that day."""

    def create_request(  # noqa: PLR0913
        self,
        tenant: str,
        worker_id: UUID,
        meal_type: MealType,
        request_date: date,
        submitted_at: datetime,
        submitted_by: str,
    ) -> FoodRequestRecord:
        """Insert a request, raising DuplicateSubmissionError on conflict."""

    def list_requests(
        self, tenant: str, request_date: date, meal_type: MealType | None = None
    ) -> list[FoodRequestRecord]:
        """Return requests for a day, newest first."""


@dataclass(frozen=True)
class MealBoardEntry:
    """Status of one meal type for the admin board."""

    meal_type: MealType
    status: MealStatus
    config: MealWindowConfig | None


@dataclass(frozen=True)
class MealBoard:
    """Current status of every meal type for a tenant."""

    tenant: str
    checked_at: datetime
    entries: list[MealBoardEntry]
    all_blocked: bool


@dataclass
class BulkSubmissionResult:
    """Outcome of an admin bulk submission."""

    meal_type: MealType
    submitted: list[FoodRequestRecord] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)


@dataclass
class FoodRequestService:
    """Service that gates and records meal requests."""

    settings_service: MealSettingsService
    repository: FoodRequestRepository
    clock: Clock

    def has_submitted_today(
        self, tenant: str, worker_id: UUID, meal_type: MealType
    ) -> bool:
        """Return True if the worker already requested the meal today."""
        today = self.clock.now().date()
        return self.repository.has_request(
            validate_tenant(tenant), worker_id, meal_type, today
        )

    def submit(
        self,
        tenant: str,
        worker_id: UUID,
        meal_type: MealType,
        submitted_by: str = SUBMITTED_BY_WORKER,
    ) -> FoodRequestRecord:
        """Record a request after checking the meal window at write time."""
        settings = self.settings_service.get_settings(tenant)
        config = settings.meals.get(meal_type)
        now = self.clock.now()
        already = self.repository.has_request(
            settings.tenant, worker_id, meal_type, now.date()
        )
        if not is_eligible_for_new_submission(config, now.time(), already):
            if already:
                raise DuplicateSubmissionError(
                    f"A {meal_type} request was already submitted today"
                )
            raise MealClosedError(_closed_message(meal_type, config, now))
        record = self.repository.create_request(
            tenant=settings.tenant,
            worker_id=worker_id,
            meal_type=meal_type,
            request_date=now.date(),
            submitted_at=now,
            submitted_by=submitted_by,
        )
        _logger.info(
            "Food request submitted: tenant=%s worker=%s meal=%s by=%s",
            settings.tenant,
            worker_id,
            meal_type,
            submitted_by,
        )
        return record

    def submit_for_worker(
        self, tenant: str, worker_id: UUID, meal_type: MealType
    ) -> FoodRequestRecord:
        """Record a request on behalf of a worker."""
        return self.submit(tenant, worker_id, meal_type, SUBMITTED_BY_ADMIN)

    def submit_bulk(
        self, tenant: str, worker_ids: list[UUID], meal_type: MealType
    ) -> BulkSubmissionResult:
        """Record requests for many workers, skipping those already served."""
        settings = self.settings_service.get_settings(tenant)
        config = settings.meals.get(meal_type)
        now = self.clock.now()
        if not is_open(classify(config, now.time())):
            raise MealClosedError(_closed_message(meal_type, config, now))

        result = BulkSubmissionResult(meal_type=meal_type)
        for worker_id in dict.fromkeys(worker_ids):
            already = self.repository.has_request(
                settings.tenant, worker_id, meal_type, now.date()
            )
            if not is_eligible_for_new_submission(config, now.time(), already):
                result.skipped.append(worker_id)
                continue
            try:
                record = self.repository.create_request(
                    tenant=settings.tenant,
                    worker_id=worker_id,
                    meal_type=meal_type,
                    request_date=now.date(),
                    submitted_at=now,
                    submitted_by=SUBMITTED_BY_ADMIN,
                )
            except DuplicateSubmissionError:
                result.skipped.append(worker_id)
                continue
            result.submitted.append(record)
        _logger.info(
            "Bulk food requests: tenant=%s meal=%s submitted=%s skipped=%s",
            settings.tenant,
            meal_type,
            len(result.submitted),
            len(result.skipped),
        )
        return result

    def worker_eligibility(self, tenant: str, worker_id: UUID) -> dict[MealType, bool]:
        """Return whether the worker may request each meal right now."""
        settings = self.settings_service.get_settings(tenant)
        now = self.clock.now()
        return {
            meal_type: is_eligible_for_new_submission(
                settings.meals.get(meal_type),
                now.time(),
                self.repository.has_request(
                    settings.tenant, worker_id, meal_type, now.date()
                ),
            )
            for meal_type in MealType
        }

    def meal_board(self, tenant: str) -> MealBoard:
        """Return the status of every meal type."""
        settings = self.settings_service.get_settings(tenant)
        now = self.clock.now()
        entries = [
            MealBoardEntry(
                meal_type=meal_type,
                status=classify(settings.meals.get(meal_type), now.time()),
                config=settings.meals.get(meal_type),
            )
            for meal_type in MealType
        ]
        return MealBoard(
            tenant=settings.tenant,
            checked_at=now,
            entries=entries,
            all_blocked=all_meals_blocked(settings.meals, now.time()),
        )

    def list_today(
        self, tenant: str, meal_type: MealType | None = None
    ) -> list[FoodRequestRecord]:
        """Return today's requests, optionally for one meal type."""
        settings = self.settings_service.get_settings(tenant)
        today = self.clock.now().date()
        return self.repository.list_requests(settings.tenant, today, meal_type)

    def summary_today(self, tenant: str) -> MealSummary:
        """Return today's request counts per meal type."""
        settings = self.settings_service.get_settings(tenant)
        today = self.clock.now().date()
        counts = dict.fromkeys(MealType, 0)
        for record in self.repository.list_requests(settings.tenant, today):
            counts[record.meal_type] += 1
        return MealSummary(day=today, counts=counts)


def _closed_message(
    meal_type: MealType, config: MealWindowConfig | None, now: datetime
) -> str:
    if config is None:
        return f"{meal_type} requests are not configured"
    if classify(config, now.time()) is MealStatus.AUTO_CLOSED:
        return (
            f"{meal_type} requests are only available between "
            f"{format_clock_time(config.open_time)} and "
            f"{format_clock_time(config.close_time)}"
        )
    return f"{meal_type} requests are currently disabled"
