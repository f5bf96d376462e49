"""Exception hierarchy for ``finance_tracker``.

The normalization pipeline itself never raises on bad data; it degrades to
defaults. Errors here come from file intake and from configuration loading.
Messages of the intake errors are user-facing and shown verbatim by the CLI.
"""

from __future__ import annotations


class FinanceTrackerError(Exception):
    """Base class for all package errors."""


class IntakeError(FinanceTrackerError):
    """A file could not be turned into a batch. The caller may retry."""


class UnsupportedFileError(IntakeError):
    def __init__(self, filename: str) -> None:
        super().__init__("Please upload a CSV file")
        self.filename = filename


class CsvParseError(IntakeError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Error parsing CSV: {reason}")
        self.reason = reason


class NoDataError(IntakeError):
    def __init__(self) -> None:
        super().__init__("No data found in CSV file")


class RulesConfigError(FinanceTrackerError):
    """A keyword rules file is unreadable or does not match the schema."""


__all__ = [
    "CsvParseError",
    "FinanceTrackerError",
    "IntakeError",
    "NoDataError",
    "RulesConfigError",
    "UnsupportedFileError",
]
