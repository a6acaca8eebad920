"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from food_ledger.adapters.csv_ledger_store import CsvLedgerStore
from food_ledger.adapters.fdc_client import FdcClient
from food_ledger.config import LedgerConfig, Settings
from food_ledger.containers import AppContainer
from food_ledger.domain.ledger import Record
from food_ledger.services.food_log import FoodLogService, LedgerRepository
from food_ledger.services.nutrition import NutritionService

FIXED_NOW = datetime(2026, 2, 11, 12, 0, tzinfo=UTC)


def make_record(  # noqa: PLR0913
    record_id: str = "t1",
    date: str = "2026-02-11",
    name: str = "Test Food",
    calories: float = 200,
    protein: float = 15,
    carbs: float = 20,
    fat: float = 8,
    logged_at: str = "2026-02-11T12:00:00Z",
) -> Record:
    return Record(
        id=record_id,
        date=date,
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        logged_at=logged_at,
    )


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    """In-memory ledger repository for tests."""

    records: list[Record] = field(default_factory=list)

    def append(self, record: Record) -> None:
        self.records.append(record)

    def load(self, date: str | None = None) -> list[Record]:
        return [r for r in self.records if date is None or r.date == date]


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with an in-memory search response."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171077,
                    "description": "Chicken breast, raw",
                    "brandOwner": None,
                    "servingSize": 100,
                    "servingSizeUnit": "g",
                    "foodNutrients": [
                        {"nutrientId": 1008, "value": 120},
                        {"nutrientId": 1003, "value": 22.5},
                        {"nutrientId": 1005, "value": 0},
                        {"nutrientId": 1004, "value": 2.6},
                    ],
                },
                {
                    "fdcId": 171078,
                    "description": "Chicken thigh, raw",
                    "brandOwner": "Some Brand",
                    "foodNutrients": [
                        {"nutrientId": 1008, "value": 177},
                        {"nutrientId": 1003, "value": 19.7},
                        {"nutrientId": 1005, "value": 0},
                        {"nutrientId": 1004, "value": 10.2},
                    ],
                },
            ]
        }
    )
    queries: list[tuple[str, int]] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 8) -> dict[str, object]:
        self.queries.append((query, page_size))
        return self.search_payload


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "food_log.csv"


@pytest.fixture
def ledger_config(ledger_path: Path) -> LedgerConfig:
    return LedgerConfig(path=ledger_path)


@pytest.fixture
def store(ledger_config: LedgerConfig) -> CsvLedgerStore:
    return CsvLedgerStore(ledger_config)


@pytest.fixture
def settings(ledger_path: Path) -> Settings:
    return Settings(ledger_path=ledger_path, fdc_api_key="fdc-key")


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings, store: CsvLedgerStore, fdc_client: FakeFdcClient
) -> AppContainer:
    food_log_service = FoodLogService(
        repository=store,
        timezone_name=settings.timezone,
        clock=lambda: FIXED_NOW,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        page_size=settings.fdc_page_size,
        retry_attempts=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        ledger_store=store,
        food_log_service=food_log_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
