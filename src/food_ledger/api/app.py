"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import FastAPI, HTTPException, Request, status

from food_ledger.api.models import LogFoodRequest
from food_ledger.app_logging import configure_logging
from food_ledger.containers import AppContainer
from food_ledger.domain.ledger import DailyLog, Record


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.ledger_store.ensure()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/food/search")
    async def search_food(request: Request, q: str = "") -> dict[str, object]:
        """Search FoodData Central for foods matching ``q``."""
        state_container: AppContainer = request.app.state.container
        if not q.strip():
            return {"results": []}
        try:
            results = await state_container.nutrition_service.search(q)
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("Food search failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail="Search failed"
            ) from exc
        return {"results": [asdict(result) for result in results]}

    @app.post("/api/log", status_code=status.HTTP_201_CREATED)
    async def log_food(payload: LogFoodRequest, request: Request) -> dict[str, object]:
        """Append a food entry to the ledger."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.food_log_service.log_food(
                name=payload.name,
                calories=payload.calories,
                protein=payload.protein,
                carbs=payload.carbs,
                fat=payload.fat,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except OSError as exc:
            logger.exception("Failed to save ledger entry")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save entry",
            ) from exc
        return {"entry": _record_payload(record)}

    @app.get("/api/log")
    async def daily_log(request: Request, date: str | None = None) -> dict[str, object]:
        """Return entries and totals for a day, today by default."""
        state_container: AppContainer = request.app.state.container
        try:
            log = state_container.food_log_service.get_day(date or None)
        except OSError as exc:
            logger.exception("Failed to load ledger entries")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to load entries",
            ) from exc
        return _daily_payload(log)

    return app


def _record_payload(record: Record) -> dict[str, object]:
    return {
        "id": record.id,
        "date": record.date,
        "name": record.name,
        "calories": record.calories,
        "protein": record.protein,
        "carbs": record.carbs,
        "fat": record.fat,
        "loggedAt": record.logged_at,
    }


def _daily_payload(log: DailyLog) -> dict[str, object]:
    return {
        "date": log.date,
        "entries": [_record_payload(entry) for entry in log.entries],
        "totals": asdict(log.totals),
    }
