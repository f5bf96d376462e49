"""Data models and type aliases for ``finance_tracker``.

Raw input rows stay opaque (any header, string values). Everything downstream
of the field resolver is a frozen ``dataclass`` with explicit field order and
types. Amounts are :class:`~decimal.Decimal` so totals stay exact.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------

RawRow: TypeAlias = Mapping[str, str]
"""A single data line from a bank export, keyed by header name.

No columns are required. Unknown headers are carried along and ignored by
the resolver.
"""


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolvedFields:
    """Schema-independent fields extracted from one raw row.

    ``amount`` follows the debit-positive convention: values from a ``Debit``
    column are positive, values from a ``Credit`` column are negated. It is
    always finite.
    """

    amount: Decimal
    description: str
    date: str
    raw_category: str


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Tags derived from a description plus the effective category."""

    is_credit_card: bool
    is_required: bool
    is_subscription: bool
    is_payroll: bool
    is_transfer: bool
    category: str


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """One fired rule, reported to classifier tracers.

    ``rule`` is one of ``"credit_card"``, ``"required"``, ``"subscription"``,
    ``"payroll"`` or ``"transfer"``.
    """

    rule: str
    keyword: str
    description: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """Canonical transaction record.

    Attributes
    ----------
    id:
        Zero-based row ordinal. Unique within one batch only.
    amount:
        Signed amount; negative means money received.
    is_credit:
        Always ``amount < 0``.
    """

    id: int
    date: str
    description: str
    amount: Decimal
    category: str
    is_credit: bool
    is_credit_card: bool
    is_required: bool
    is_subscription: bool
    is_payroll: bool
    is_transfer: bool


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CategorySummary:
    name: str
    credits: Decimal
    debits: Decimal


@dataclass(frozen=True, slots=True)
class FinancialSummary:
    """Totals over one batch.

    ``category_breakdown`` holds one entry per category observed. Its order is
    not part of the contract.
    """

    total_credits: Decimal
    total_debits: Decimal
    net_balance: Decimal
    category_breakdown: tuple[CategorySummary, ...]
    transaction_count: int


# ---------------------------------------------------------------------------
# Account vault
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Account:
    id: int
    name: str
    number: str


__all__ = [
    "Account",
    "CategorySummary",
    "ClassificationResult",
    "FinancialSummary",
    "RawRow",
    "ResolvedFields",
    "RuleMatch",
    "Transaction",
]
