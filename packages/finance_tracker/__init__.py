"""Public interface for the ``finance_tracker`` package.

Symbol re-exports only; no runtime logic lives here.

Pipeline: :func:`load_rows` (or any header-keyed rows) → :func:`build_transactions`
(field resolution + classification) → :func:`summarize`.
"""

from .aggregate import spending_by_category, summarize
from .batch import Batch, BatchHolder, load_batch
from .builder import build_transaction, build_transactions
from .classifier import Classifier
from .errors import (
    CsvParseError,
    FinanceTrackerError,
    IntakeError,
    NoDataError,
    RulesConfigError,
    UnsupportedFileError,
)
from .ingest import load_rows, parse_csv_text
from .models import (
    Account,
    CategorySummary,
    ClassificationResult,
    FinancialSummary,
    RawRow,
    ResolvedFields,
    RuleMatch,
    Transaction,
)
from .resolver import parse_amount, resolve_fields
from .rules import RuleSets, load_default_rules, load_rules, resolve_rules
from .vault import AccountVault, FileStorage, MemoryStorage, mask_account_number

__all__ = [
    # Pipeline
    "build_transaction",
    "build_transactions",
    "Classifier",
    "parse_amount",
    "resolve_fields",
    "spending_by_category",
    "summarize",
    # Intake / batches
    "Batch",
    "BatchHolder",
    "load_batch",
    "load_rows",
    "parse_csv_text",
    # Configuration
    "RuleSets",
    "load_default_rules",
    "load_rules",
    "resolve_rules",
    # Vault
    "AccountVault",
    "FileStorage",
    "MemoryStorage",
    "mask_account_number",
    # Models / types
    "Account",
    "CategorySummary",
    "ClassificationResult",
    "FinancialSummary",
    "RawRow",
    "ResolvedFields",
    "RuleMatch",
    "Transaction",
    # Errors
    "CsvParseError",
    "FinanceTrackerError",
    "IntakeError",
    "NoDataError",
    "RulesConfigError",
    "UnsupportedFileError",
]
