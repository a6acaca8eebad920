"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_ledger.adapters.csv_ledger_store import CsvLedgerStore
from food_ledger.adapters.fdc_client import HttpxFdcClient
from food_ledger.config import Settings
from food_ledger.services.food_log import FoodLogService
from food_ledger.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ledger_store: CsvLedgerStore
    food_log_service: FoodLogService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    ledger_store = CsvLedgerStore(resolved_settings.ledger_config())
    food_log_service = FoodLogService(
        repository=ledger_store,
        timezone_name=resolved_settings.timezone,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        page_size=resolved_settings.fdc_page_size,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        ledger_store=ledger_store,
        food_log_service=food_log_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
