"""Tests for the food log service."""

from datetime import UTC, datetime

import pytest

from food_ledger.adapters.csv_ledger_store import CsvLedgerStore
from food_ledger.services.food_log import FoodLogService, InvalidFoodEntryError
from tests.conftest import FIXED_NOW, InMemoryLedgerRepository, make_record


def _service(repository: InMemoryLedgerRepository) -> FoodLogService:
    return FoodLogService(
        repository=repository,
        clock=lambda: FIXED_NOW,
        id_factory=lambda: "entry-1",
    )


def test_log_food_stamps_and_appends() -> None:
    repository = InMemoryLedgerRepository()
    service = _service(repository)

    record = service.log_food(
        "  Nutella ", calories=539, protein=6.34, carbs=57.5, fat=30.96
    )

    assert record.id == "entry-1"
    assert record.date == "2026-02-11"
    assert record.name == "Nutella"
    assert record.calories == 539
    assert record.protein == 6.3
    assert record.carbs == 57.5
    assert record.fat == 31.0
    assert record.logged_at == "2026-02-11T12:00:00.000Z"
    assert repository.records == [record]


def test_log_food_requires_a_name() -> None:
    repository = InMemoryLedgerRepository()
    service = _service(repository)

    with pytest.raises(InvalidFoodEntryError, match="name is required"):
        service.log_food("   ", calories=100)

    assert repository.records == []


def test_log_food_rejects_negative_quantities() -> None:
    service = _service(InMemoryLedgerRepository())

    with pytest.raises(InvalidFoodEntryError, match="fat"):
        service.log_food("Salad", calories=150, fat=-1)


def test_log_food_rejects_non_finite_quantities() -> None:
    repository = InMemoryLedgerRepository()
    service = _service(repository)

    with pytest.raises(InvalidFoodEntryError, match="protein must be a finite"):
        service.log_food("Salad", protein=float("inf"))
    with pytest.raises(InvalidFoodEntryError, match="calories must be a finite"):
        service.log_food("Salad", calories=float("nan"))

    assert repository.records == []


def test_log_food_generates_unique_ids(store: CsvLedgerStore) -> None:
    service = FoodLogService(repository=store)

    first = service.log_food("Apple", calories=95)
    second = service.log_food("Apple", calories=95)

    assert first.id != second.id
    assert [entry.id for entry in store.load(first.date)] == [first.id, second.id]


def test_get_day_returns_entries_and_totals() -> None:
    repository = InMemoryLedgerRepository(
        records=[
            make_record(record_id="a", date="2026-02-10", calories=100),
            make_record(record_id="b", calories=200, protein=10, carbs=20, fat=5),
            make_record(record_id="c", calories=300, protein=25, carbs=30, fat=10),
        ]
    )
    service = _service(repository)

    log = service.get_day("2026-02-11")

    assert log.date == "2026-02-11"
    assert [entry.id for entry in log.entries] == ["b", "c"]
    assert log.totals.calories == 500
    assert log.totals.protein == 35


def test_get_day_defaults_to_today() -> None:
    late = datetime(2026, 2, 11, 23, 59, tzinfo=UTC)
    repository = InMemoryLedgerRepository(records=[make_record()])
    service = FoodLogService(repository=repository, clock=lambda: late)

    log = service.get_day()

    assert service.today() == "2026-02-11"
    assert log.date == "2026-02-11"
    assert len(log.entries) == 1


def test_get_day_with_no_entries_has_zero_totals() -> None:
    service = _service(InMemoryLedgerRepository())

    log = service.get_day("2026-01-01")

    assert log.entries == []
    assert log.totals.calories == 0
    assert log.totals.fat == 0
