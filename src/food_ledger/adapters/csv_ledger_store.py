"""Flat-file ledger store."""

import logging
import os
from dataclasses import dataclass

from food_ledger.adapters.ledger_codec import (
    MalformedRowError,
    decode_record,
    encode_record,
    iter_rows,
    parse_line,
)
from food_ledger.config import LedgerConfig
from food_ledger.domain.ledger import LoadReport, Record

_logger = logging.getLogger(__name__)


@dataclass
class CsvLedgerStore:
    """Append-only ledger kept in a delimited text file.

    Every load rescans the whole file. Appends take no lock: writers in
    separate processes may interleave bytes when a row is larger than the
    platform's atomic append size.
    """

    config: LedgerConfig

    def ensure(self) -> None:
        """Create the ledger directory and header-only file if missing."""
        path = self.config.path
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("x", encoding="utf-8", newline="") as handle:
                handle.write(self.config.header + "\n")
        except FileExistsError:
            return
        _logger.info("Created ledger file: path=%s", path)

    def append(self, record: Record) -> None:
        """Write a record as the new final row of the ledger.

        A file left without a trailing newline (an interrupted append) gets
        one first, so the cut-off row stays on its own line.
        """
        payload = (encode_record(record, self.config) + "\n").encode("utf-8")
        self.ensure()
        with self.config.path.open("a+b") as handle:
            if handle.seek(0, os.SEEK_END) > 0:
                handle.seek(-1, os.SEEK_END)
                if handle.read(1) != b"\n":
                    payload = b"\n" + payload
            handle.write(payload)
        _logger.debug("Ledger append: id=%s date=%s", record.id, record.date)

    def load(self, date: str | None = None) -> list[Record]:
        """Return records in write order, optionally only those on ``date``.

        Only ``None`` disables the filter; an empty string matches no record.
        """
        return self.load_report(date).records

    def load_report(self, date: str | None = None) -> LoadReport:
        """Return matching records with the number of malformed rows skipped."""
        self.ensure()
        with self.config.path.open(encoding="utf-8", newline="") as handle:
            text = handle.read()

        rows = iter_rows(text, self.config)
        next(rows, None)
        records: list[Record] = []
        skipped = 0
        for row in rows:
            try:
                record = decode_record(parse_line(row, self.config))
            except MalformedRowError as exc:
                skipped += 1
                _logger.debug("Skipping malformed ledger row: %s", exc)
                continue
            if date is None or record.date == date:
                records.append(record)

        if skipped:
            _logger.warning(
                "Skipped malformed ledger rows: path=%s count=%s",
                self.config.path,
                skipped,
            )
        return LoadReport(records=records, skipped=skipped)
