"""Request bodies and response serializers for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from food_requests.domain.meals import (
    FoodRequestRecord,
    MealSummary,
    MealType,
    MealWindowConfig,
    TenantMealSettings,
    format_clock_time,
)
from food_requests.services.food_requests import BulkSubmissionResult, MealBoard
from food_requests.services.reports import DailyReport, MealReport


class FoodRequestIn(BaseModel):
    """Single meal request."""

    worker_id: UUID
    meal_type: MealType


class BulkFoodRequestIn(BaseModel):
    """Meal request for several workers at once."""

    worker_ids: list[UUID] = Field(min_length=1)
    meal_type: MealType


class MealWindowUpdate(BaseModel):
    """New window times and mode for a meal type."""

    open_time: str
    close_time: str
    auto_switch: bool = False


def serialize_window(config: MealWindowConfig | None) -> dict[str, object] | None:
    if config is None:
        return None
    return {
        "enabled": config.enabled,
        "open_time": format_clock_time(config.open_time),
        "close_time": format_clock_time(config.close_time),
        "auto_switch": config.auto_switch,
    }


def serialize_settings(settings: TenantMealSettings) -> dict[str, object]:
    payload: dict[str, object] = {"tenant": settings.tenant}
    for meal_type in MealType:
        payload[meal_type.value] = serialize_window(settings.meals.get(meal_type))
    payload["email_reports_enabled"] = settings.email_reports_enabled
    payload["updated_at"] = (
        settings.updated_at.isoformat() if settings.updated_at else None
    )
    return payload


def serialize_board(board: MealBoard) -> dict[str, object]:
    return {
        "tenant": board.tenant,
        "checked_at": board.checked_at.isoformat(),
        "all_blocked": board.all_blocked,
        "meals": {
            entry.meal_type.value: {
                "status": entry.status.value,
                "window": serialize_window(entry.config),
            }
            for entry in board.entries
        },
    }


def serialize_record(record: FoodRequestRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "tenant": record.tenant,
        "worker_id": str(record.worker_id),
        "meal_type": record.meal_type.value,
        "request_date": record.request_date.isoformat(),
        "submitted_at": record.submitted_at.isoformat(),
        "submitted_by": record.submitted_by,
    }


def serialize_summary(summary: MealSummary) -> dict[str, object]:
    payload: dict[str, object] = {
        meal_type.value: count for meal_type, count in summary.counts.items()
    }
    payload["date"] = summary.day.isoformat()
    payload["total"] = summary.total
    return payload


def serialize_bulk(result: BulkSubmissionResult) -> dict[str, object]:
    return {
        "meal_type": result.meal_type.value,
        "submitted": [serialize_record(record) for record in result.submitted],
        "skipped": [str(worker_id) for worker_id in result.skipped],
    }


def serialize_report(report: MealReport) -> dict[str, object]:
    return {
        "tenant": report.tenant,
        "meal_type": report.meal_type.value,
        "date": report.day.isoformat(),
        "total_count": report.total_count,
    }


def serialize_daily_report(report: DailyReport) -> dict[str, object]:
    payload: dict[str, object] = {
        meal_type.value: count for meal_type, count in report.counts.items()
    }
    payload["tenant"] = report.tenant
    payload["date"] = report.day.isoformat()
    payload["total_count"] = report.total_count
    return payload
