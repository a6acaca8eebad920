"""Application configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LEDGER_FIELDS = (
    "id",
    "date",
    "name",
    "calories",
    "protein",
    "carbs",
    "fat",
    "loggedAt",
)


@dataclass(frozen=True)
class LedgerConfig:
    """Location and dialect of the ledger file."""

    path: Path
    delimiter: str = ","
    quote_char: str = '"'

    def __post_init__(self) -> None:
        checks = (("delimiter", self.delimiter), ("quote", self.quote_char))
        for label, value in checks:
            if len(value) != 1:
                raise ValueError(f"Ledger {label} must be a single character")
            if value in "\r\n":
                raise ValueError(f"Ledger {label} cannot be a line break")
        if self.delimiter == self.quote_char:
            raise ValueError("Ledger delimiter and quote must differ")

    @property
    def header(self) -> str:
        """Header line naming the record fields."""
        return self.delimiter.join(LEDGER_FIELDS)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ledger_path: Path = Path("data/food_log.csv")
    ledger_delimiter: str = ","
    ledger_quote_char: str = '"'
    timezone: str = "UTC"
    fdc_api_key: str = "DEMO_KEY"
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_page_size: int = 8
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def ledger_config(self) -> LedgerConfig:
        """Build the ledger configuration passed to store operations."""
        return LedgerConfig(
            path=self.ledger_path,
            delimiter=self.ledger_delimiter,
            quote_char=self.ledger_quote_char,
        )
