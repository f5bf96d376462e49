"""Keyword classification of transaction descriptions.

A rule fires when the upper-cased description contains the upper-cased
keyword anywhere (substring match, not whole word). All five tags are
evaluated independently; the effective category is then chosen by a fixed
precedence, first match wins:

1. transfer      → ``"Transfer"``
2. payroll       → ``"Payroll"``
3. credit card   → ``"Credit Card Payment"``
4. required      → ``"Required Payment"``
5. subscription  → ``"Subscription"``
6. otherwise the raw category from the export, unchanged.

Rule-derived categories always replace a category supplied by the export.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeAlias

from .logging_setup import get_logger
from .models import ClassificationResult, RuleMatch
from .resolver import DEFAULT_CATEGORY
from .rules import RuleSets, load_default_rules

PAYROLL_KEYWORD = "PAYROLL"
TRANSFER_KEYWORD = "TRANSFER"

CATEGORY_TRANSFER = "Transfer"
CATEGORY_PAYROLL = "Payroll"
CATEGORY_CREDIT_CARD = "Credit Card Payment"
CATEGORY_REQUIRED = "Required Payment"
CATEGORY_SUBSCRIPTION = "Subscription"

Tracer: TypeAlias = Callable[[RuleMatch], None]

_logger = get_logger("finance_tracker.classifier")


def _matches(rule: str, text: str, keywords: Sequence[str], description: str) -> list[RuleMatch]:
    return [
        RuleMatch(rule=rule, keyword=kw, description=description)
        for kw in keywords
        if kw.upper() in text
    ]


class Classifier:
    """Classify descriptions against injected :class:`RuleSets`.

    Parameters
    ----------
    rules:
        Keyword lists. Defaults to the packaged lists.
    tracer:
        Optional callable receiving one :class:`RuleMatch` per fired rule,
        in evaluation order.
    """

    def __init__(self, rules: RuleSets | None = None, *, tracer: Tracer | None = None) -> None:
        self._rules = rules if rules is not None else load_default_rules()
        self._tracer = tracer

    @property
    def rules(self) -> RuleSets:
        return self._rules

    def explain(self, description: str) -> list[RuleMatch]:
        """Return every rule that fires for ``description``, without side effects."""

        text = description.upper()
        matches: list[RuleMatch] = []
        matches += _matches("credit_card", text, self._rules.credit_card, description)
        matches += _matches("required", text, self._rules.required, description)
        matches += _matches("subscription", text, self._rules.subscription, description)
        matches += _matches("payroll", text, (PAYROLL_KEYWORD,), description)
        matches += _matches("transfer", text, (TRANSFER_KEYWORD,), description)
        return matches

    def classify(
        self, description: str, raw_category: str = DEFAULT_CATEGORY
    ) -> ClassificationResult:
        matches = self.explain(description)
        fired = {m.rule for m in matches}

        for m in matches:
            _logger.debug("rule %s matched %r via %r", m.rule, m.description, m.keyword)
            if self._tracer is not None:
                self._tracer(m)

        is_transfer = "transfer" in fired
        is_payroll = "payroll" in fired
        is_credit_card = "credit_card" in fired
        is_required = "required" in fired
        is_subscription = "subscription" in fired

        if is_transfer:
            category = CATEGORY_TRANSFER
        elif is_payroll:
            category = CATEGORY_PAYROLL
        elif is_credit_card:
            category = CATEGORY_CREDIT_CARD
        elif is_required:
            category = CATEGORY_REQUIRED
        elif is_subscription:
            category = CATEGORY_SUBSCRIPTION
        else:
            category = raw_category or DEFAULT_CATEGORY

        return ClassificationResult(
            is_credit_card=is_credit_card,
            is_required=is_required,
            is_subscription=is_subscription,
            is_payroll=is_payroll,
            is_transfer=is_transfer,
            category=category,
        )


__all__ = [
    "CATEGORY_CREDIT_CARD",
    "CATEGORY_PAYROLL",
    "CATEGORY_REQUIRED",
    "CATEGORY_SUBSCRIPTION",
    "CATEGORY_TRANSFER",
    "Classifier",
    "PAYROLL_KEYWORD",
    "TRANSFER_KEYWORD",
    "Tracer",
]
