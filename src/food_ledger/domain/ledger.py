"""Domain models for the food ledger."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Record:
    """One logged consumption event."""

    id: str
    date: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    logged_at: str


@dataclass(frozen=True)
class Totals:
    """Aggregate calories and macros over a set of records."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class LoadReport:
    """Records decoded by one ledger scan and the malformed rows it skipped."""

    records: list[Record] = field(default_factory=list)
    skipped: int = 0


@dataclass(frozen=True)
class DailyLog:
    """Entries logged on a single day with their totals."""

    date: str
    entries: list[Record]
    totals: Totals
