from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import finance_tracker.cli as cli_mod

runner = CliRunner()

BANK_CSV = (
    "Date,Description,Debit,Credit,Category\n"
    "2025-08-01,NETFLIX.COM,50.00,,Entertainment\n"
    "2025-08-02,ACME CORP PAYROLL DEPOSIT,,1000.00,Income\n"
    "2025-08-03,TRANSFER TO SAVINGS,,25.00,\n"
    "2025-08-04,CORNER CAFE,4.50,,Food\n"
)


@pytest.fixture(autouse=True)
def _no_global_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # configure_logging() is process-wide; keep it out of the test session.
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **k: None)


@pytest.fixture
def bank_csv(tmp_path: Path) -> Path:
    p = tmp_path / "bank.csv"
    p.write_text(BANK_CSV, encoding="utf-8")
    return p


def test_summary_text(bank_csv: Path):
    result = runner.invoke(cli_mod.app, ["summary", str(bank_csv)])
    assert result.exit_code == 0, result.output
    assert "Total Credits: $1,025.00" in result.output
    assert "Total Debits:  $54.50" in result.output
    assert "Net Balance:   $970.50" in result.output
    assert "Transactions:  4" in result.output
    assert "Subscription" in result.output
    assert "Spending by category:" in result.output


def test_summary_json(bank_csv: Path):
    result = runner.invoke(cli_mod.app, ["summary", str(bank_csv), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["totalCredits"] == "1025.00"
    assert data["totalDebits"] == "54.50"
    assert data["netBalance"] == "970.50"
    assert data["transactionCount"] == 4
    names = {c["name"] for c in data["categoryBreakdown"]}
    assert names == {"Subscription", "Payroll", "Transfer", "Food"}


def test_transactions_json(bank_csv: Path):
    result = runner.invoke(cli_mod.app, ["transactions", str(bank_csv), "--json"])
    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert [r["id"] for r in rows] == [0, 1, 2, 3]
    assert rows[1]["amount"] == "-1000.00"
    assert rows[1]["isCredit"] is True
    assert rows[1]["isPayroll"] is True
    assert rows[2]["category"] == "Transfer"


def test_transactions_limit_notes_truncation(bank_csv: Path):
    result = runner.invoke(cli_mod.app, ["transactions", str(bank_csv), "--limit", "2"])
    assert result.exit_code == 0, result.output
    assert "NETFLIX.COM" in result.output
    assert "CORNER CAFE" not in result.output
    assert "Showing first 2 of 4 transactions" in result.output


def test_custom_rules_option(bank_csv: Path, tmp_path: Path):
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"subscription": ["CAFE"]}), encoding="utf-8")
    result = runner.invoke(
        cli_mod.app, ["transactions", str(bank_csv), "--rules", str(rules), "--json"]
    )
    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert rows[0]["category"] == "Entertainment"
    assert rows[3]["category"] == "Subscription"


@pytest.mark.parametrize(
    ("name", "content", "message"),
    [
        ("bank.txt", BANK_CSV, "Please upload a CSV file"),
        ("empty.csv", "Date,Description,Amount\n", "No data found in CSV file"),
        ("broken.csv", 'Date,Description\n2025-01-01,"oops\n', "Error parsing CSV"),
    ],
)
def test_intake_errors_exit_nonzero(tmp_path: Path, name: str, content: str, message: str):
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    result = runner.invoke(cli_mod.app, ["summary", str(p)])
    assert result.exit_code == 1
    assert message in result.output


def test_bad_rules_file_exit_nonzero(bank_csv: Path, tmp_path: Path):
    rules = tmp_path / "rules.json"
    rules.write_text("[]", encoding="utf-8")
    result = runner.invoke(cli_mod.app, ["summary", str(bank_csv), "--rules", str(rules)])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_accounts_add_list_remove(tmp_path: Path):
    vault = str(tmp_path / "vault.dat")

    result = runner.invoke(cli_mod.app, ["accounts", "add", "Chase Checking", "123456789", "--vault", vault])
    assert result.exit_code == 0, result.output
    assert "••••6789" in result.output

    result = runner.invoke(cli_mod.app, ["accounts", "list", "--vault", vault])
    assert result.exit_code == 0, result.output
    line = result.output.strip()
    account_id, name, number = line.split("\t")
    assert (name, number) == ("Chase Checking", "••••6789")

    result = runner.invoke(cli_mod.app, ["accounts", "list", "--vault", vault, "--reveal"])
    assert "123456789" in result.output

    result = runner.invoke(cli_mod.app, ["accounts", "remove", account_id, "--vault", vault])
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli_mod.app, ["accounts", "list", "--vault", vault])
    assert "No accounts saved yet." in result.output


def test_accounts_add_requires_values(tmp_path: Path):
    result = runner.invoke(
        cli_mod.app, ["accounts", "add", " ", "123", "--vault", str(tmp_path / "v.dat")]
    )
    assert result.exit_code == 1


def test_log_level_option_reaches_logging_setup(
    bank_csv: Path, monkeypatch: pytest.MonkeyPatch
):
    seen: list[str | None] = []
    monkeypatch.setattr(cli_mod, "configure_logging", seen.append)

    result = runner.invoke(cli_mod.app, ["--log-level", "debug", "summary", str(bank_csv)])
    assert result.exit_code == 0, result.output
    assert seen == ["debug"]

    result = runner.invoke(cli_mod.app, ["summary", str(bank_csv)])
    assert seen == ["debug", None]


def test_summary_survives_exponent_amounts(tmp_path: Path):
    p = tmp_path / "odd.csv"
    p.write_text(
        "Description,Debit,Credit\nBIG,1e30,\nHUGE,,1e999999999\nCORNER CAFE,4.50,\n",
        encoding="utf-8",
    )
    result = runner.invoke(cli_mod.app, ["summary", str(p)])
    assert result.exit_code == 0, result.output
    assert "Total Debits:  $4.50" in result.output
    assert "Total Credits: $0.00" in result.output
