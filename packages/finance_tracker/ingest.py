"""File intake: CSV file → raw rows.

Parsing follows RFC 4180 via the stdlib :mod:`csv` module in strict mode, so
structurally broken input (e.g. an unterminated quoted field) is reported
instead of silently merged. Rows whose values are all empty are skipped.

Three distinct failures are surfaced, all subclasses of
:class:`~finance_tracker.errors.IntakeError`:

- :class:`UnsupportedFileError`: the file name does not end in ``.csv``;
  checked before the file is opened.
- :class:`CsvParseError`: the file cannot be read or parsed.
- :class:`NoDataError`: the file is empty or has a header but no data rows.
"""

from __future__ import annotations

import csv
from io import StringIO
from os import PathLike
from pathlib import Path

from .errors import CsvParseError, NoDataError, UnsupportedFileError
from .logging_setup import get_logger

_logger = get_logger("finance_tracker.ingest")


def ensure_csv_name(path: str | PathLike[str]) -> Path:
    p = Path(path)
    if p.suffix.lower() != ".csv":
        raise UnsupportedFileError(p.name)
    return p


def parse_csv_text(csv_text: str) -> list[dict[str, str]]:
    """Parse CSV text with a header row into header-keyed rows.

    Raises :class:`CsvParseError` on malformed structure and
    :class:`NoDataError` when no non-empty data row follows the header.
    """

    with StringIO(csv_text) as f:
        reader = csv.DictReader(f, strict=True)
        rows: list[dict[str, str]] = []
        try:
            if not reader.fieldnames:
                # Empty input: nothing to parse, not malformed.
                raise NoDataError()
            for row in reader:
                # DictReader collects surplus cells under a ``None`` key and
                # fills short rows with ``None`` values; keep ``dict[str, str]``.
                normalized = {
                    k: (v if isinstance(v, str) else "") for k, v in row.items() if k is not None
                }
                if all(v.strip() == "" for v in normalized.values()):
                    continue
                rows.append(normalized)
        except csv.Error as exc:
            raise CsvParseError(f"line {reader.line_num}: {exc}") from exc

    if not rows:
        raise NoDataError()
    return rows


def load_rows(path: str | PathLike[str]) -> list[dict[str, str]]:
    """Read the CSV file at ``path`` and return its data rows."""

    p = ensure_csv_name(path)
    try:
        # utf-8-sig drops the byte order mark some bank exports start with.
        text = p.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise CsvParseError(f"file not found: {p}") from exc
    except UnicodeDecodeError as exc:
        raise CsvParseError(f"file is not valid UTF-8 text: {p.name}") from exc
    except OSError as exc:
        raise CsvParseError(f"cannot read {p}: {exc.strerror or exc}") from exc

    rows = parse_csv_text(text)
    _logger.info("read %d rows from %s", len(rows), p.name)
    return rows


__all__ = ["ensure_csv_name", "load_rows", "parse_csv_text"]
