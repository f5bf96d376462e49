"""Aggregation over a complete batch of transactions.

:func:`summarize` makes a single pass, adding ``abs(amount)`` to either the
credit or the debit side, both overall and per category. Categories only show
up once observed. The result depends on the transaction sequence alone, so
repeated calls return equal summaries.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal

from .models import CategorySummary, FinancialSummary, Transaction


def summarize(transactions: Iterable[Transaction]) -> FinancialSummary:
    total_credits = Decimal("0")
    total_debits = Decimal("0")
    count = 0
    # name -> [credits, debits]
    by_category: dict[str, list[Decimal]] = {}

    for t in transactions:
        count += 1
        magnitude = abs(t.amount)
        acc = by_category.get(t.category)
        if acc is None:
            acc = by_category[t.category] = [Decimal("0"), Decimal("0")]
        if t.is_credit:
            total_credits += magnitude
            acc[0] += magnitude
        else:
            total_debits += magnitude
            acc[1] += magnitude

    return FinancialSummary(
        total_credits=total_credits,
        total_debits=total_debits,
        net_balance=total_credits - total_debits,
        category_breakdown=tuple(
            CategorySummary(name=name, credits=c, debits=d)
            for name, (c, d) in by_category.items()
        ),
        transaction_count=count,
    )


def spending_by_category(summary: FinancialSummary) -> Iterator[tuple[str, Decimal]]:
    """Yield ``(category, debits)`` pairs for spending charts.

    Presentation helper only: categories without debits are skipped.
    """

    for c in summary.category_breakdown:
        if c.debits:
            yield c.name, c.debits


__all__ = ["spending_by_category", "summarize"]
