"""Webhook delivery for meal reports."""

from dataclasses import dataclass

import httpx

from food_requests.domain.meals import FoodRequestRecord
from food_requests.services.reports import DailyReport, MealReport, ReportNotifier


@dataclass
class HttpxWebhookReportNotifier(ReportNotifier):
    """Posts meal reports as JSON to a configured webhook."""

    url: str
    http_client: httpx.AsyncClient
    token: str | None = None

    @classmethod
    def create(cls, url: str, token: str | None = None) -> "HttpxWebhookReportNotifier":
        """Create a notifier with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient(), token=token)

    async def send_meal_report(self, report: MealReport) -> None:
        """Send a closing report to the webhook."""
        await self._post(_report_payload(report))

    async def send_daily_report(self, report: DailyReport) -> None:
        """Send an end-of-day summary to the webhook."""
        await self._post(_daily_payload(report))

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _post(self, payload: dict[str, object]) -> None:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.post(
            self.url, json=payload, headers=headers, timeout=10
        )
        response.raise_for_status()


def _report_payload(report: MealReport) -> dict[str, object]:
    return {
        "type": f"{report.meal_type}_closing_report",
        "tenant": report.tenant,
        "meal_type": report.meal_type.value,
        "date": report.day.isoformat(),
        "closed_at": report.closed_at.isoformat(),
        "total_count": report.total_count,
        "requests": _request_rows(report.requests),
    }


def _daily_payload(report: DailyReport) -> dict[str, object]:
    meals = {
        meal_type.value: {
            "count": count,
            "requests": _request_rows(report.requests.get(meal_type, [])),
        }
        for meal_type, count in report.counts.items()
    }
    return {
        "type": "daily_report",
        "tenant": report.tenant,
        "date": report.day.isoformat(),
        "sent_at": report.sent_at.isoformat(),
        "total_count": report.total_count,
        "meals": meals,
    }


def _request_rows(records: list[FoodRequestRecord]) -> list[dict[str, str]]:
    return [
        {
            "worker_id": str(record.worker_id),
            "submitted_at": record.submitted_at.isoformat(),
            "submitted_by": record.submitted_by,
        }
        for record in records
    ]
