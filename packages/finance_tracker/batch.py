"""Batches: one loaded file's transactions plus their summary.

:class:`BatchHolder` owns the currently displayed batch. A new batch replaces
the current one only once it has been fully built and summarized; when a
load fails the previous batch stays in place and the error propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from os import PathLike
from pathlib import Path

from .aggregate import summarize
from .builder import build_transactions
from .classifier import Classifier
from .ingest import load_rows
from .logging_setup import get_logger
from .models import FinancialSummary, Transaction

_logger = get_logger("finance_tracker.batch")


@dataclass(frozen=True, slots=True)
class Batch:
    source: str
    transactions: tuple[Transaction, ...]
    summary: FinancialSummary


def load_batch(
    path: str | PathLike[str],
    classifier: Classifier | None = None,
    *,
    now: datetime | None = None,
) -> Batch:
    """Read, normalize, classify and summarize the CSV file at ``path``.

    Raises :class:`~finance_tracker.errors.IntakeError` subclasses for files
    that cannot be loaded.
    """

    rows = load_rows(path)
    transactions = tuple(build_transactions(rows, classifier, now=now))
    summary = summarize(transactions)
    _logger.info(
        "built batch from %s: %d transactions, %d categories",
        Path(path).name,
        summary.transaction_count,
        len(summary.category_breakdown),
    )
    return Batch(source=str(path), transactions=transactions, summary=summary)


class BatchHolder:
    """Holds the current batch for a presentation layer."""

    def __init__(self, classifier: Classifier | None = None) -> None:
        self._classifier = classifier if classifier is not None else Classifier()
        self._current: Batch | None = None

    @property
    def current(self) -> Batch | None:
        return self._current

    def load(self, path: str | PathLike[str], *, now: datetime | None = None) -> Batch:
        batch = load_batch(path, self._classifier, now=now)
        self._current = batch
        return batch

    def clear(self) -> None:
        self._current = None


__all__ = ["Batch", "BatchHolder", "load_batch"]
