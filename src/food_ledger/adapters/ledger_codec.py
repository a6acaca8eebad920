"""Text codec for ledger rows.

A row is the record's eight fields joined by the configured delimiter. A field
holding the delimiter, the quote character or a line break is wrapped in
quotes, with inner quotes doubled. Decoding walks the row one character at a
time, tracking whether it is inside a quoted field.
"""

import math
from collections.abc import Iterator

from food_ledger.config import LEDGER_FIELDS, LedgerConfig
from food_ledger.domain.ledger import Record

FIELD_COUNT = len(LEDGER_FIELDS)

_LINE_BREAKS = ("\n", "\r")


class LedgerRecordError(ValueError):
    """Raised when a record cannot be written as a ledger row."""


class MalformedRowError(ValueError):
    """Raised when a ledger row does not decode into a record."""


def encode_field(value: str, config: LedgerConfig) -> str:
    """Quote a field if it holds the delimiter, the quote or a line break."""
    quote = config.quote_char
    specials = (config.delimiter, quote, *_LINE_BREAKS)
    if any(char in value for char in specials):
        return quote + value.replace(quote, quote * 2) + quote
    return value


def encode_record(record: Record, config: LedgerConfig) -> str:
    """Encode a record as a row, without the trailing newline."""
    texts = [
        _text_field(record.id, "id"),
        _text_field(record.date, "date"),
        _text_field(record.name, "name"),
        _number_field(record.calories, "calories"),
        _number_field(record.protein, "protein"),
        _number_field(record.carbs, "carbs"),
        _number_field(record.fat, "fat"),
        _text_field(record.logged_at, "loggedAt"),
    ]
    return config.delimiter.join(encode_field(text, config) for text in texts)


def parse_line(line: str, config: LedgerConfig) -> list[str]:
    """Split a row into raw field values, honouring quoted fields."""
    delimiter = config.delimiter
    quote = config.quote_char
    fields: list[str] = []
    current: list[str] = []
    quoted = False
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if quoted:
            if char == quote and index + 1 < length and line[index + 1] == quote:
                current.append(quote)
                index += 1
            elif char == quote:
                quoted = False
            else:
                current.append(char)
        elif char == quote:
            quoted = True
        elif char == delimiter:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return fields


def decode_record(fields: list[str]) -> Record:
    """Build a record from parsed fields; extra trailing fields are ignored."""
    if len(fields) < FIELD_COUNT:
        raise MalformedRowError(
            f"expected {FIELD_COUNT} fields, got {len(fields)}"
        )
    return Record(
        id=fields[0],
        date=fields[1],
        name=fields[2],
        calories=_parse_number(fields[3]),
        protein=_parse_number(fields[4]),
        carbs=_parse_number(fields[5]),
        fat=_parse_number(fields[6]),
        logged_at=fields[7],
    )


def iter_rows(text: str, config: LedgerConfig) -> Iterator[str]:
    """Yield the non-blank logical rows of a ledger file, header included.

    A physical line that leaves a quoted field open is joined with the lines
    after it, but only when the joined text decodes to exactly one record.
    Otherwise the line is yielded alone.
    """
    lines = text.split("\n")
    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1
        if not line.strip():
            continue
        candidate = line
        end = index
        while _has_open_quote(candidate, config) and end < len(lines):
            candidate = f"{candidate}\n{lines[end]}"
            end += 1
        if end > index and len(parse_line(candidate, config)) == FIELD_COUNT:
            index = end
            line = candidate
        yield line.removesuffix("\r")


def _has_open_quote(line: str, config: LedgerConfig) -> bool:
    # Entering and leaving a quoted field each take one quote; escaped
    # quotes come in pairs.
    return line.count(config.quote_char) % 2 == 1


def _text_field(value: object, label: str) -> str:
    if not isinstance(value, str):
        raise LedgerRecordError(f"Ledger field {label} must be text")
    return value


def _number_field(value: object, label: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise LedgerRecordError(f"Ledger field {label} must be a number")
    if not math.isfinite(value):
        raise LedgerRecordError(f"Ledger field {label} must be finite")
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _parse_number(text: str) -> float:
    cleaned = text.strip()
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise MalformedRowError(f"not a number: {text!r}") from exc
    if not math.isfinite(value):
        raise MalformedRowError(f"not a finite number: {text!r}")
    return value
