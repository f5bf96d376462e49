from decimal import Decimal
from pathlib import Path

import pytest

from finance_tracker import (
    BatchHolder,
    Classifier,
    CsvParseError,
    IntakeError,
    NoDataError,
    UnsupportedFileError,
    load_batch,
    load_rows,
    parse_csv_text,
)
from tests.helpers.factories import TEST_RULES

GOOD_CSV = (
    "Date,Description,Debit,Credit\n"
    "2025-08-01,NETFLIX.COM,50.00,\n"
    "2025-08-02,ACME CORP PAYROLL DEPOSIT,,1000.00\n"
)


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_non_csv_name_rejected_before_reading(tmp_path: Path):
    missing = tmp_path / "statement.txt"
    with pytest.raises(UnsupportedFileError) as ei:
        load_rows(missing)
    assert str(ei.value) == "Please upload a CSV file"


def test_extension_check_is_case_insensitive(tmp_path: Path):
    p = _write(tmp_path, "EXPORT.CSV", GOOD_CSV)
    assert len(load_rows(p)) == 2


def test_header_only_file_has_no_data(tmp_path: Path):
    p = _write(tmp_path, "empty.csv", "Date,Description,Amount\n")
    with pytest.raises(NoDataError) as ei:
        load_rows(p)
    assert str(ei.value) == "No data found in CSV file"


def test_empty_file_has_no_data():
    with pytest.raises(NoDataError):
        parse_csv_text("")


def test_blank_rows_are_skipped():
    rows = parse_csv_text("Date,Amount\n,\n2025-01-01,5\n\n , \n")
    assert rows == [{"Date": "2025-01-01", "Amount": "5"}]


def test_only_blank_rows_is_no_data():
    with pytest.raises(NoDataError):
        parse_csv_text("Date,Amount\n,\n,\n")


def test_unterminated_quote_is_a_parse_error():
    with pytest.raises(CsvParseError) as ei:
        parse_csv_text('Date,Description,Amount\n2025-01-01,"unterminated,5\n')
    assert str(ei.value).startswith("Error parsing CSV: ")


def test_missing_file_is_a_parse_error(tmp_path: Path):
    with pytest.raises(CsvParseError):
        load_rows(tmp_path / "nope.csv")


def test_non_utf8_file_is_a_parse_error(tmp_path: Path):
    p = tmp_path / "latin.csv"
    p.write_bytes(b"Description,Amount\n\xff\xfe\xfa,1\n")
    with pytest.raises(CsvParseError):
        load_rows(p)


def test_byte_order_mark_is_dropped(tmp_path: Path):
    p = tmp_path / "bom.csv"
    p.write_bytes(b"\xef\xbb\xbfDate,Amount\n2025-01-01,5\n")
    assert load_rows(p) == [{"Date": "2025-01-01", "Amount": "5"}]


def test_short_and_long_rows_keep_string_values():
    rows = parse_csv_text("A,B\n1\n2,3,4\n")
    assert rows == [{"A": "1", "B": ""}, {"A": "2", "B": "3"}]


def test_intake_errors_share_a_base_class():
    assert issubclass(UnsupportedFileError, IntakeError)
    assert issubclass(CsvParseError, IntakeError)
    assert issubclass(NoDataError, IntakeError)


def test_load_batch_builds_transactions_and_summary(tmp_path: Path):
    p = _write(tmp_path, "bank.csv", GOOD_CSV)
    batch = load_batch(p, Classifier(TEST_RULES))
    assert [t.category for t in batch.transactions] == ["Subscription", "Payroll"]
    assert batch.summary.total_credits == Decimal("1000.00")
    assert batch.summary.total_debits == Decimal("50.00")
    assert batch.summary.transaction_count == 2


def test_failed_load_keeps_previous_batch(tmp_path: Path):
    holder = BatchHolder(Classifier(TEST_RULES))
    good = holder.load(_write(tmp_path, "bank.csv", GOOD_CSV))

    with pytest.raises(NoDataError):
        holder.load(_write(tmp_path, "empty.csv", "Date,Amount\n"))
    assert holder.current is good

    with pytest.raises(UnsupportedFileError):
        holder.load(tmp_path / "notes.txt")
    assert holder.current is good


def test_successful_load_replaces_batch_and_clear_discards(tmp_path: Path):
    holder = BatchHolder(Classifier(TEST_RULES))
    holder.load(_write(tmp_path, "a.csv", GOOD_CSV))
    second = holder.load(_write(tmp_path, "b.csv", "Description,Amount\nCOFFEE,3.50\n"))
    assert holder.current is second
    assert [t.id for t in second.transactions] == [0]

    holder.clear()
    assert holder.current is None
