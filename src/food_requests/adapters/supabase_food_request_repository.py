"""Supabase repository for food requests."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from food_requests.domain.errors import DuplicateSubmissionError
from food_requests.domain.meals import FoodRequestRecord, MealType
from food_requests.services.food_requests import FoodRequestRepository

_TABLE = "food_requests"
_COLUMNS = "id, tenant, worker_id, meal_type, request_date, submitted_at, submitted_by"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseFoodRequestRepository(FoodRequestRepository):
    """Supabase implementation; uniqueness comes from a table constraint."""

    client: Client

    def has_request(
        self, tenant: str, worker_id: UUID, meal_type: MealType, request_date: date
    ) -> bool:
        """Return True if a request row exists for the worker, meal and day."""
        response = (
            self.client.table(_TABLE)
            .select("id")
            .eq("tenant", tenant)
            .eq("worker_id", str(worker_id))
            .eq("meal_type", meal_type.value)
            .eq("request_date", request_date.isoformat())
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_request(  # noqa: PLR0913
        self,
        tenant: str,
        worker_id: UUID,
        meal_type: MealType,
        request_date: date,
        submitted_at: datetime,
        submitted_by: str,
    ) -> FoodRequestRecord:
        """Insert a request row."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "tenant": tenant,
                        "worker_id": str(worker_id),
                        "meal_type": meal_type.value,
                        "request_date": request_date.isoformat(),
                        "submitted_at": submitted_at.isoformat(),
                        "submitted_by": submitted_by,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateSubmissionError(
                    f"A {meal_type} request was already submitted today"
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create food request")
        return _row_to_record(response.data[0])

    def list_requests(
        self, tenant: str, request_date: date, meal_type: MealType | None = None
    ) -> list[FoodRequestRecord]:
        """Return requests for a day, newest first."""
        query = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("tenant", tenant)
            .eq("request_date", request_date.isoformat())
        )
        if meal_type is not None:
            query = query.eq("meal_type", meal_type.value)
        response = query.order("submitted_at", desc=True).execute()
        return [_row_to_record(row) for row in response.data or []]


def _row_to_record(row: dict[str, object]) -> FoodRequestRecord:
    return FoodRequestRecord(
        id=UUID(str(row["id"])),
        tenant=str(row["tenant"]),
        worker_id=UUID(str(row["worker_id"])),
        meal_type=MealType(row["meal_type"]),
        request_date=date.fromisoformat(str(row["request_date"])),
        submitted_at=datetime.fromisoformat(str(row["submitted_at"])),
        submitted_by=str(row.get("submitted_by") or "worker"),
    )
