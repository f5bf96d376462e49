"""Raw row → :class:`~finance_tracker.models.ResolvedFields`.

Bank exports disagree on column names, so each field is looked up through an
ordered list of header aliases. Every alias is tried as written and then
lower-cased (``Debit`` then ``debit``). A value counts as present when it is
non-empty after trimming.

Amount precedence (first match wins):

1. ``Debit`` present → ``+parse(value)``
2. ``Credit`` present → ``-parse(value)``
3. first present of ``Amount`` / ``Transaction Amount`` → ``parse(value)``
4. otherwise ``0``

Resolution never raises. Missing or unparsable values fall back to defaults
(amount ``0``, description ``"Unknown"``, category ``"Uncategorized"``, date =
processing time).
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from .models import RawRow, ResolvedFields

DEBIT_ALIASES: tuple[str, ...] = ("Debit",)
CREDIT_ALIASES: tuple[str, ...] = ("Credit",)
AMOUNT_ALIASES: tuple[str, ...] = ("Amount", "Transaction Amount")
DESCRIPTION_ALIASES: tuple[str, ...] = (
    "Description",
    "Merchant",
    "Name",
    "Transaction Description",
)
DATE_ALIASES: tuple[str, ...] = ("Date", "Transaction Date", "Post Date")
CATEGORY_ALIASES: tuple[str, ...] = ("Category", "Type")

DEFAULT_DESCRIPTION = "Unknown"
DEFAULT_CATEGORY = "Uncategorized"

_ZERO = Decimal("0")
# Largest accepted order of magnitude. Exponent notation such as "1e999999999"
# would otherwise overflow the default decimal context in later arithmetic.
_MAX_ADJUSTED_EXPONENT = 15


def _first_present(row: RawRow, aliases: Sequence[str]) -> str | None:
    for alias in aliases:
        for key in (alias, alias.lower()):
            v = row.get(key)
            if v is None:
                continue
            t = v.strip()
            if t:
                return t
    return None


def parse_amount(raw: str | None) -> Decimal:
    """Parse a bank-export amount, returning ``0`` when it cannot be read.

    Accepts a leading ``+``/``-``, a ``$`` symbol, thousands separators and
    accounting parentheses (``(12.50)`` is negative) in any order. Values of
    ``1e16`` or more in magnitude are treated as unreadable.
    """

    if raw is None:
        return _ZERO
    s = raw.strip()
    if not s:
        return _ZERO

    negative = False
    # Strip sign, currency symbol and surrounding parentheses until stable.
    while True:
        changed = False
        if s.startswith("+"):
            s = s[1:].lstrip()
            changed = True
        elif s.startswith("-"):
            negative = True
            s = s[1:].lstrip()
            changed = True
        if s.startswith("$"):
            s = s[1:].lstrip()
            changed = True
        if s.startswith("(") and s.endswith(")") and len(s) >= 2:
            negative = True
            s = s[1:-1].strip()
            changed = True
        if not changed:
            break

    s = s.replace(",", "").strip()
    try:
        d = Decimal(s)
    except InvalidOperation:
        return _ZERO
    if not d.is_finite() or d.adjusted() > _MAX_ADJUSTED_EXPONENT:
        return _ZERO
    return -abs(d) if negative and d else d


def _negate(d: Decimal) -> Decimal:
    # Keep zero unsigned so "-0.00" never shows up downstream.
    return -d if d else abs(d)


def resolve_amount(row: RawRow) -> Decimal:
    debit = _first_present(row, DEBIT_ALIASES)
    if debit is not None:
        return parse_amount(debit)
    credit = _first_present(row, CREDIT_ALIASES)
    if credit is not None:
        return _negate(parse_amount(credit))
    return parse_amount(_first_present(row, AMOUNT_ALIASES))


def _iso_z(ts: datetime) -> str:
    # UTC with a "Z" suffix, e.g. 2025-01-02T03:04:05.000Z.
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now_iso() -> str:
    return _iso_z(datetime.now(UTC))


def resolve_fields(
    row: RawRow, *, now: datetime | None = None
) -> ResolvedFields:
    """Extract amount, description, date and raw category from ``row``.

    ``now`` replaces the processing timestamp used when the row has no date
    column, which keeps tests deterministic.
    """

    date = _first_present(row, DATE_ALIASES)
    if date is None:
        date = _iso_z(now) if now is not None else _now_iso()

    return ResolvedFields(
        amount=resolve_amount(row),
        description=_first_present(row, DESCRIPTION_ALIASES) or DEFAULT_DESCRIPTION,
        date=date,
        raw_category=_first_present(row, CATEGORY_ALIASES) or DEFAULT_CATEGORY,
    )


__all__ = [
    "AMOUNT_ALIASES",
    "CATEGORY_ALIASES",
    "CREDIT_ALIASES",
    "DATE_ALIASES",
    "DEBIT_ALIASES",
    "DEFAULT_CATEGORY",
    "DEFAULT_DESCRIPTION",
    "DESCRIPTION_ALIASES",
    "parse_amount",
    "resolve_amount",
    "resolve_fields",
]
