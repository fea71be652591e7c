"""Tests for HTTP-based adapters."""

import asyncio
import json
from datetime import date, datetime
from uuid import uuid4

import httpx
import pytest

from food_requests.adapters.webhook_report_client import HttpxWebhookReportNotifier
from food_requests.domain.meals import FoodRequestRecord, MealType
from food_requests.services.reports import DailyReport, MealReport
from tests.conftest import KOLKATA


def _report() -> MealReport:
    closed_at = datetime(2026, 3, 10, 14, 0, tzinfo=KOLKATA)
    record = FoodRequestRecord(
        id=uuid4(),
        tenant="acme",
        worker_id=uuid4(),
        meal_type=MealType.LUNCH,
        request_date=date(2026, 3, 10),
        submitted_at=closed_at,
        submitted_by="worker",
    )
    return MealReport(
        tenant="acme",
        meal_type=MealType.LUNCH,
        day=date(2026, 3, 10),
        closed_at=closed_at,
        requests=[record],
    )


def test_webhook_notifier_posts_report() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    notifier = HttpxWebhookReportNotifier(
        url="https://hooks.example.com/meals", http_client=async_client, token="t0k"
    )

    asyncio.run(notifier.send_meal_report(_report()))

    body = captured["body"]
    assert isinstance(body, dict)
    assert captured["auth"] == "Bearer t0k"
    assert body["type"] == "lunch_closing_report"
    assert body["total_count"] == 1
    assert body["date"] == "2026-03-10"


def test_webhook_notifier_posts_daily_report() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200)

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    notifier = HttpxWebhookReportNotifier(
        url="https://hooks.example.com/meals", http_client=async_client
    )
    lunch = _report()
    report = DailyReport(
        tenant="acme",
        day=date(2026, 3, 10),
        sent_at=datetime(2026, 3, 10, 23, 0, tzinfo=KOLKATA),
        requests={MealType.LUNCH: lunch.requests},
    )

    asyncio.run(notifier.send_daily_report(report))

    body = captured["body"]
    assert isinstance(body, dict)
    assert captured["auth"] is None
    assert body["type"] == "daily_report"
    assert body["total_count"] == 1
    assert body["meals"]["breakfast"] == {"count": 0, "requests": []}
    assert body["meals"]["lunch"]["count"] == 1
    assert body["meals"]["lunch"]["requests"][0]["submitted_by"] == "worker"


def test_webhook_notifier_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    notifier = HttpxWebhookReportNotifier(
        url="https://hooks.example.com/meals", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(notifier.send_meal_report(_report()))
