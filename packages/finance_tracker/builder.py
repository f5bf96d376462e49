"""Assemble canonical transactions from raw rows.

``build_transactions`` is the per-batch pipeline: resolve fields, classify the
description, then build one :class:`Transaction` per input row with ``id``
set to the row's zero-based position. No row is dropped and nothing raises on
bad data.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .classifier import Classifier
from .models import ClassificationResult, RawRow, ResolvedFields, Transaction
from .resolver import resolve_fields


def build_transaction(
    idx: int, fields: ResolvedFields, classification: ClassificationResult
) -> Transaction:
    return Transaction(
        id=idx,
        date=fields.date,
        description=fields.description,
        amount=fields.amount,
        category=classification.category,
        # Negative amounts are money received.
        is_credit=fields.amount < 0,
        is_credit_card=classification.is_credit_card,
        is_required=classification.is_required,
        is_subscription=classification.is_subscription,
        is_payroll=classification.is_payroll,
        is_transfer=classification.is_transfer,
    )


def build_transactions(
    rows: Iterable[RawRow],
    classifier: Classifier | None = None,
    *,
    now: datetime | None = None,
) -> list[Transaction]:
    """Run the full normalization pipeline over ``rows``.

    The rows are materialized before classification starts so that a batch is
    always built from a complete input.
    """

    materialized = list(rows)
    clf = classifier if classifier is not None else Classifier()
    out: list[Transaction] = []
    for idx, row in enumerate(materialized):
        fields = resolve_fields(row, now=now)
        result = clf.classify(fields.description, fields.raw_category)
        out.append(build_transaction(idx, fields, result))
    return out


__all__ = ["build_transaction", "build_transactions"]
