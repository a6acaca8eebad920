"""Food logging service backed by the ledger."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from food_ledger.domain.ledger import DailyLog, Record
from food_ledger.services.totals import aggregate, round_tenth

_logger = logging.getLogger(__name__)


class InvalidFoodEntryError(ValueError):
    """Raised when a food entry is missing required content."""


class LedgerRepository(Protocol):
    """Persistence interface for ledger records."""

    def append(self, record: Record) -> None:
        """Append a record to the ledger."""

    def load(self, date: str | None = None) -> list[Record]:
        """Return records, optionally only those dated ``date``."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _new_id() -> str:
    return str(uuid4())


@dataclass
class FoodLogService:
    """Service that records food entries and builds daily views."""

    repository: LedgerRepository
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_id

    def today(self) -> str:
        """Return today's date in the configured timezone."""
        return _local_date(self.clock(), self.timezone_name)

    def log_food(  # noqa: PLR0913
        self,
        name: str,
        calories: float = 0,
        protein: float = 0,
        carbs: float = 0,
        fat: float = 0,
    ) -> Record:
        """Validate a food entry, stamp it and append it to the ledger."""
        cleaned = name.strip()
        if not cleaned:
            raise InvalidFoodEntryError("Food name is required")
        quantities = {
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
        }
        for label, value in quantities.items():
            if not math.isfinite(value):
                raise InvalidFoodEntryError(f"{label} must be a finite number")
            if value < 0:
                raise InvalidFoodEntryError(f"{label} must not be negative")

        now = self.clock()
        record = Record(
            id=self.id_factory(),
            date=_local_date(now, self.timezone_name),
            name=cleaned,
            calories=float(calories),
            protein=round_tenth(protein),
            carbs=round_tenth(carbs),
            fat=round_tenth(fat),
            logged_at=_format_timestamp(now),
        )
        self.repository.append(record)
        _logger.info("Logged food: id=%s date=%s", record.id, record.date)
        return record

    def get_day(self, day: str | None = None) -> DailyLog:
        """Return entries and totals for a day, defaulting to today."""
        resolved = day or self.today()
        entries = self.repository.load(resolved)
        return DailyLog(date=resolved, entries=entries, totals=aggregate(entries))


def _local_date(moment: datetime, timezone_name: str) -> str:
    return moment.astimezone(ZoneInfo(timezone_name)).date().isoformat()


def _format_timestamp(moment: datetime) -> str:
    stamp = moment.astimezone(UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
