"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_requests.api.admin import router as admin_router
from food_requests.api.models import FoodRequestIn, serialize_board, serialize_record
from food_requests.app_logging import configure_logging
from food_requests.containers import AppContainer
from food_requests.domain.errors import (
    AutoSwitchActiveError,
    DuplicateSubmissionError,
    FoodRequestError,
)

_ERROR_STATUS = {
    AutoSwitchActiveError: status.HTTP_409_CONFLICT,
    DuplicateSubmissionError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(FoodRequestError)
    async def food_request_error(
        request: Request, exc: FoodRequestError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals/{tenant}/windows")
    async def meal_windows(tenant: str, request: Request) -> dict[str, object]:
        """Return the current status of every meal type."""
        state_container: AppContainer = request.app.state.container
        board = state_container.food_request_service.meal_board(tenant)
        return serialize_board(board)

    @app.get("/meals/{tenant}/workers/{worker_id}/eligibility")
    async def worker_eligibility(
        tenant: str, worker_id: UUID, request: Request
    ) -> dict[str, object]:
        """Return which meals the worker may request right now."""
        state_container: AppContainer = request.app.state.container
        eligibility = state_container.food_request_service.worker_eligibility(
            tenant, worker_id
        )
        return {
            "worker_id": str(worker_id),
            "meals": {
                meal_type.value: eligible for meal_type, eligible in eligibility.items()
            },
        }

    @app.post("/meals/{tenant}/requests", status_code=status.HTTP_201_CREATED)
    async def submit_request(
        tenant: str, body: FoodRequestIn, request: Request
    ) -> dict[str, object]:
        """Submit a worker's own meal request."""
        state_container: AppContainer = request.app.state.container
        record = state_container.food_request_service.submit(
            tenant, body.worker_id, body.meal_type
        )
        return serialize_record(record)

    return app
