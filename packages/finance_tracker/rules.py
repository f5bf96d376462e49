"""Keyword rule sets used by the classifier.

Rule sets are immutable configuration injected into
:class:`~finance_tracker.classifier.Classifier`. The package ships default
lists in ``data/default_rules.json``; deployments can point
``FINANCE_TRACKER_RULES_PATH`` (or the CLI ``--rules`` option) at a JSON file
of the same shape to swap them out.

JSON shape::

    {"credit_card": [...], "required": [...], "subscription": [...]}
"""

from __future__ import annotations

import os
from importlib import resources
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import RulesConfigError
from .logging_setup import get_logger

_logger = get_logger("finance_tracker.rules")

_DEFAULT_RULES_RESOURCE = "default_rules.json"


class RuleSets(BaseModel):
    """Ordered keyword lists for the three configurable rule sets.

    Keywords are trimmed, blank entries dropped and duplicates removed while
    keeping first-seen order. Matching is case-insensitive, so case is kept
    as written.
    """

    model_config = ConfigDict(
        strict=True, frozen=True, extra="forbid", str_strip_whitespace=True
    )

    credit_card: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    subscription: tuple[str, ...] = ()

    @field_validator("credit_card", "required", "subscription")
    @classmethod
    def _normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        out: list[str] = []
        for kw in v:
            k = kw.strip()
            if not k or k in seen:
                continue
            seen.add(k)
            out.append(k)
        return tuple(out)


def _parse_rules(text: str, *, source: str) -> RuleSets:
    try:
        return RuleSets.model_validate_json(text)
    except ValidationError as exc:
        raise RulesConfigError(f"invalid rules file {source}: {exc}") from exc


def load_default_rules() -> RuleSets:
    """Return the keyword lists bundled with the package."""

    text = (
        resources.files("finance_tracker.data")
        .joinpath(_DEFAULT_RULES_RESOURCE)
        .read_text(encoding="utf-8")
    )
    return _parse_rules(text, source=f"<package>/{_DEFAULT_RULES_RESOURCE}")


def load_rules(path: str | PathLike[str]) -> RuleSets:
    """Load rule sets from a JSON file at ``path``."""

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesConfigError(f"cannot read rules file {p}: {exc}") from exc
    rules = _parse_rules(text, source=str(p))
    _logger.info(
        "loaded rules from %s (credit_card=%d required=%d subscription=%d)",
        p,
        len(rules.credit_card),
        len(rules.required),
        len(rules.subscription),
    )
    return rules


def resolve_rules(path: str | PathLike[str] | None = None) -> RuleSets:
    """Pick rule sets: explicit ``path``, then ``FINANCE_TRACKER_RULES_PATH``, then defaults."""

    if path is not None:
        return load_rules(path)
    env_path = os.getenv("FINANCE_TRACKER_RULES_PATH")
    if env_path and env_path.strip():
        return load_rules(env_path.strip())
    return load_default_rules()


__all__ = ["RuleSets", "load_default_rules", "load_rules", "resolve_rules"]
