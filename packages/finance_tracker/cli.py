# ruff: noqa: I001
"""CLI for the ``finance_tracker`` package.

A Typer application that acts as the presentation layer: it loads a bank
export, runs the normalization pipeline and prints summary totals, a category
table or the transaction list. It also manages the local account vault.

Environment variables are loaded from a ``.env`` in the working directory
(without overriding the existing environment) before any command runs:

- ``FINANCE_TRACKER_RULES_PATH``: JSON keyword rules replacing the defaults.
- ``FINANCE_TRACKER_VAULT_PATH``: location of the account vault file.
- ``FINANCE_TRACKER_LOG_LEVEL``: logging level (default ``INFO``), overridden
  by ``--log-level``.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv

from .aggregate import spending_by_category
from .batch import Batch, load_batch
from .classifier import Classifier
from .errors import IntakeError, RulesConfigError
from .logging_setup import configure_logging
from .models import FinancialSummary, Transaction
from .rules import resolve_rules
from .vault import AccountVault, FileStorage, mask_account_number

DEFAULT_LIST_LIMIT = 50

app = typer.Typer(
    name="finance-tracker",
    help="Normalize bank CSV exports, classify transactions and report totals.",
    no_args_is_help=True,
    add_completion=False,
)
accounts_app = typer.Typer(help="Manage saved accounts (stored locally, base64-obfuscated).")
app.add_typer(accounts_app, name="accounts")


# ---- Formatting helpers -------------------------------------------------------


def _money(value: Decimal) -> str:
    q = value.quantize(Decimal("0.01"))
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"


def _tag_markers(t: Transaction) -> str:
    marks = [
        ("T", t.is_transfer),
        ("P", t.is_payroll),
        ("C", t.is_credit_card),
        ("R", t.is_required),
        ("S", t.is_subscription),
    ]
    return "".join(m if on else "." for m, on in marks)


def _summary_to_json(summary: FinancialSummary) -> dict[str, Any]:
    return {
        "totalCredits": str(summary.total_credits),
        "totalDebits": str(summary.total_debits),
        "netBalance": str(summary.net_balance),
        "transactionCount": summary.transaction_count,
        "categoryBreakdown": [
            {"name": c.name, "credits": str(c.credits), "debits": str(c.debits)}
            for c in summary.category_breakdown
        ],
    }


def _transaction_to_json(t: Transaction) -> dict[str, Any]:
    return {
        "id": t.id,
        "date": t.date,
        "description": t.description,
        "amount": str(t.amount),
        "category": t.category,
        "isCredit": t.is_credit,
        "isCreditCard": t.is_credit_card,
        "isRequired": t.is_required,
        "isSubscription": t.is_subscription,
        "isPayroll": t.is_payroll,
        "isTransfer": t.is_transfer,
    }


def _load_or_exit(csv_path: Path, rules_path: Path | None) -> Batch:
    try:
        classifier = Classifier(resolve_rules(rules_path))
        return load_batch(csv_path, classifier)
    except (IntakeError, RulesConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


RULES_HELP = "JSON keyword rules file (falls back to FINANCE_TRACKER_RULES_PATH, then defaults)."


# ---- Commands -------------------------------------------------------------------


@app.command("summary")
def summary_cmd(
    csv_path: Path = typer.Argument(..., help="Bank export (.csv) to summarize"),
    rules: Path | None = typer.Option(None, "--rules", help=RULES_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit the summary as JSON."),
) -> None:
    """Print credit/debit totals and the per-category breakdown."""

    batch = _load_or_exit(csv_path, rules)
    s = batch.summary

    if as_json:
        typer.echo(json.dumps(_summary_to_json(s), indent=2))
        return

    typer.echo(f"Total Credits: {_money(s.total_credits)}")
    typer.echo(f"Total Debits:  {_money(s.total_debits)}")
    typer.echo(f"Net Balance:   {_money(s.net_balance)}")
    typer.echo(f"Transactions:  {s.transaction_count}")
    typer.echo("")
    typer.echo(f"{'Category':<28}{'Credits':>14}{'Debits':>14}")
    for c in sorted(s.category_breakdown, key=lambda c: c.name):
        typer.echo(f"{c.name[:27]:<28}{_money(c.credits):>14}{_money(c.debits):>14}")

    spending = list(spending_by_category(s))
    if spending and s.total_debits:
        typer.echo("")
        typer.echo("Spending by category:")
        for name, debits in sorted(spending, key=lambda p: p[1], reverse=True):
            share = debits / s.total_debits * 100
            typer.echo(f"  {name}: {share:.0f}%")


@app.command("transactions")
def transactions_cmd(
    csv_path: Path = typer.Argument(..., help="Bank export (.csv) to list"),
    rules: Path | None = typer.Option(None, "--rules", help=RULES_HELP),
    limit: int = typer.Option(DEFAULT_LIST_LIMIT, "--limit", min=1, help="Rows to show."),
    as_json: bool = typer.Option(False, "--json", help="Emit all transactions as JSON."),
) -> None:
    """List transactions with their category, tags and credit/debit type.

    Tags column: T=transfer, P=payroll, C=credit card payment, R=required
    payment, S=subscription.
    """

    batch = _load_or_exit(csv_path, rules)
    txs = batch.transactions

    if as_json:
        typer.echo(json.dumps([_transaction_to_json(t) for t in txs], indent=2))
        return

    for t in txs[:limit]:
        kind = "+ Credit" if t.is_credit else "- Debit"
        sign = "+" if t.is_credit else ""
        typer.echo(
            f"{t.date[:10]:<12}{_tag_markers(t)} {t.description[:40]:<41}"
            f"{t.category[:22]:<23}{kind:<10}{sign}{_money(abs(t.amount))}"
        )
    if len(txs) > limit:
        typer.echo(f"Showing first {limit} of {len(txs)} transactions")


# ---- Account vault --------------------------------------------------------------

VAULT_HELP = "Vault file (falls back to FINANCE_TRACKER_VAULT_PATH, then ~/.finance_tracker)."


def _vault(path: Path | None) -> AccountVault:
    return AccountVault(FileStorage(path))


@accounts_app.command("list")
def accounts_list_cmd(
    vault: Path | None = typer.Option(None, "--vault", help=VAULT_HELP),
    reveal: bool = typer.Option(False, "--reveal", help="Show full account numbers."),
) -> None:
    accounts = _vault(vault).list()
    if not accounts:
        typer.echo("No accounts saved yet.")
        return
    for a in accounts:
        number = a.number if reveal else mask_account_number(a.number)
        typer.echo(f"{a.id}\t{a.name}\t{number}")


@accounts_app.command("add")
def accounts_add_cmd(
    name: str = typer.Argument(..., help="Account name, e.g. 'Chase Checking'"),
    number: str = typer.Argument(..., help="Account number"),
    vault: Path | None = typer.Option(None, "--vault", help=VAULT_HELP),
) -> None:
    account = _vault(vault).add(name, number)
    if account is None:
        typer.echo("Error: account name and number are required.", err=True)
        raise typer.Exit(1)
    typer.echo(f"Added {account.name} ({mask_account_number(account.number)}) id={account.id}")


@accounts_app.command("remove")
def accounts_remove_cmd(
    account_id: int = typer.Argument(..., help="Id shown by 'accounts list'"),
    vault: Path | None = typer.Option(None, "--vault", help=VAULT_HELP),
) -> None:
    _vault(vault).remove(account_id)
    typer.echo(f"Removed account {account_id}")


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level name; defaults to FINANCE_TRACKER_LOG_LEVEL, then INFO.",
    ),
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
