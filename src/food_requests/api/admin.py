"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from food_requests.api.models import (
    BulkFoodRequestIn,
    FoodRequestIn,
    MealWindowUpdate,
    serialize_bulk,
    serialize_daily_report,
    serialize_record,
    serialize_report,
    serialize_settings,
    serialize_summary,
    serialize_window,
)
from food_requests.domain.meals import MealType  # noqa: TC001

if TYPE_CHECKING:
    from food_requests.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/reports/dispatch", dependencies=[Depends(require_admin)])
async def dispatch_reports(request: Request) -> dict[str, object]:
    """Send closing reports for meals whose window ends now."""
    container: AppContainer = request.app.state.container
    reports = await container.report_service.dispatch_closing_reports()
    return {"sent": [serialize_report(report) for report in reports]}


@router.post("/reports/daily", dependencies=[Depends(require_admin)])
async def dispatch_daily_reports(request: Request) -> dict[str, object]:
    """Send today's summary report to every reporting tenant."""
    container: AppContainer = request.app.state.container
    reports = await container.report_service.dispatch_daily_reports()
    return {"sent": [serialize_daily_report(report) for report in reports]}


@router.get("/{tenant}/settings", dependencies=[Depends(require_admin)])
async def get_settings(tenant: str, request: Request) -> dict[str, object]:
    """Return the meal settings of a tenant."""
    container: AppContainer = request.app.state.container
    return serialize_settings(container.meal_settings_service.get_settings(tenant))


@router.post(
    "/{tenant}/settings/email-reports/toggle", dependencies=[Depends(require_admin)]
)
async def toggle_email_reports(tenant: str, request: Request) -> dict[str, object]:
    """Turn closing reports on or off."""
    container: AppContainer = request.app.state.container
    enabled = container.meal_settings_service.toggle_email_reports(tenant)
    return {"email_reports_enabled": enabled}


@router.put("/{tenant}/settings/{meal_type}", dependencies=[Depends(require_admin)])
async def update_meal_settings(
    tenant: str, meal_type: MealType, body: MealWindowUpdate, request: Request
) -> dict[str, object]:
    """Change the window of a meal type."""
    container: AppContainer = request.app.state.container
    config = container.meal_settings_service.update_meal_settings(
        tenant,
        meal_type,
        open_time=body.open_time,
        close_time=body.close_time,
        auto_switch=body.auto_switch,
    )
    return {"meal_type": meal_type.value, **(serialize_window(config) or {})}


@router.post(
    "/{tenant}/settings/{meal_type}/toggle", dependencies=[Depends(require_admin)]
)
async def toggle_meal(
    tenant: str, meal_type: MealType, request: Request
) -> dict[str, object]:
    """Flip the manual switch of a meal type."""
    container: AppContainer = request.app.state.container
    enabled = container.meal_settings_service.toggle_enabled(tenant, meal_type)
    return {"meal_type": meal_type.value, "enabled": enabled}


@router.get("/{tenant}/requests", dependencies=[Depends(require_admin)])
async def list_requests(
    tenant: str, request: Request, meal_type: MealType | None = None
) -> dict[str, object]:
    """Return today's requests."""
    container: AppContainer = request.app.state.container
    records = container.food_request_service.list_today(tenant, meal_type)
    return {"requests": [serialize_record(record) for record in records]}


@router.get("/{tenant}/requests/summary", dependencies=[Depends(require_admin)])
async def requests_summary(tenant: str, request: Request) -> dict[str, object]:
    """Return today's request counts per meal."""
    container: AppContainer = request.app.state.container
    return serialize_summary(container.food_request_service.summary_today(tenant))


@router.post(
    "/{tenant}/requests",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def submit_for_worker(
    tenant: str, body: FoodRequestIn, request: Request
) -> dict[str, object]:
    """Submit a request on behalf of a worker."""
    container: AppContainer = request.app.state.container
    record = container.food_request_service.submit_for_worker(
        tenant, body.worker_id, body.meal_type
    )
    return serialize_record(record)


@router.post("/{tenant}/requests/bulk", dependencies=[Depends(require_admin)])
async def submit_bulk(
    tenant: str, body: BulkFoodRequestIn, request: Request
) -> dict[str, object]:
    """Submit requests for several workers."""
    container: AppContainer = request.app.state.container
    result = container.food_request_service.submit_bulk(
        tenant, body.worker_ids, body.meal_type
    )
    return serialize_bulk(result)
