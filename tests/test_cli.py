"""Tests for the SplitLedger CLI."""

import json

import pytest
from typer.testing import CliRunner

from splitledger.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep settings from picking up a real .env or environment."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "SPLITLEDGER_LEDGER_PATH",
        "SPLITLEDGER_STRICT_SPLITS",
        "SPLITLEDGER_DEFAULT_CURRENCY",
    ):
        monkeypatch.delenv(var, raising=False)


def write_ledger(path, transactions):
    path.write_text(
        json.dumps(
            {
                "id": "g1",
                "name": "Flat",
                "members": [
                    {"id": "a", "name": "Ann"},
                    {"id": "b", "name": "Bob"},
                    {"id": "c", "name": "Cy"},
                ],
                "transactions": transactions,
            }
        )
    )
    return path


@pytest.fixture
def ledger(tmp_path):
    """Ledger where Ann paid 90.00 split three ways."""
    return write_ledger(
        tmp_path / "ledger.json",
        [
            {
                "id": "t1",
                "title": "Groceries",
                "amount": 9000,
                "payer_id": "a",
                "participant_ids": ["a", "b", "c"],
                "occurred_at": "2025-03-01T10:00:00",
            }
        ],
    )


@pytest.fixture
def skewed_ledger(tmp_path):
    """Ledger with exact shares that only cover part of the amount."""
    return write_ledger(
        tmp_path / "skewed.json",
        [
            {
                "id": "t1",
                "title": "Dinner",
                "amount": 1000,
                "payer_id": "a",
                "participant_ids": ["a", "b"],
                "split": {"mode": "exact", "shares": {"a": 100, "b": 100}},
            }
        ],
    )


class TestBalancesCommand:
    def test_balances(self, ledger):
        result = runner.invoke(app, ["balances", str(ledger)])

        assert result.exit_code == 0
        assert "Ann" in result.output
        assert "$60.00" in result.output
        assert "-$30.00" in result.output

    def test_ledger_from_env(self, ledger, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LEDGER_PATH", str(ledger))

        result = runner.invoke(app, ["balances"])

        assert result.exit_code == 0
        assert "Bob" in result.output

    def test_no_ledger(self):
        result = runner.invoke(app, ["balances"])

        assert result.exit_code == 1
        assert "No ledger file given" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["balances", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_percentage_reported(self, tmp_path):
        path = write_ledger(
            tmp_path / "nan.json",
            [
                {
                    "id": "t1",
                    "amount": 1000,
                    "payer_id": "a",
                    "participant_ids": ["a", "b"],
                    "split": {
                        "mode": "percentage",
                        "percentages": {"a": float("nan"), "b": 50},
                    },
                }
            ],
        )

        result = runner.invoke(app, ["balances", str(path)])

        assert result.exit_code == 1
        assert "Invalid ledger" in result.output


class TestSettleCommand:
    def test_settle(self, ledger):
        result = runner.invoke(app, ["settle", str(ledger)])

        assert result.exit_code == 0
        assert "Bob" in result.output
        assert "$30.00" in result.output

    def test_settled_group(self, tmp_path):
        path = write_ledger(tmp_path / "empty.json", [])

        result = runner.invoke(app, ["settle", str(path)])

        assert result.exit_code == 0
        assert "Everyone is settled up!" in result.output

    def test_residual_shown(self, skewed_ledger):
        result = runner.invoke(app, ["settle", str(skewed_ledger)])

        assert result.exit_code == 0
        assert "cannot be settled" in result.output
        assert "$8.00" in result.output

    def test_strict_mode_fails(self, skewed_ledger, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_STRICT_SPLITS", "true")

        result = runner.invoke(app, ["settle", str(skewed_ledger)])

        assert result.exit_code == 1
        assert "split issue" in result.output


class TestOtherCommands:
    def test_export_balances(self, ledger):
        result = runner.invoke(app, ["export", "balances", str(ledger)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "member,netBalance",
            "Ann,60.00",
            "Bob,-30.00",
            "Cy,-30.00",
        ]

    def test_export_transactions_to_file(self, ledger, tmp_path):
        out = tmp_path / "tx.csv"

        result = runner.invoke(
            app, ["export", "transactions", str(ledger), "--output", str(out)]
        )

        assert result.exit_code == 0
        assert out.read_text().splitlines()[1] == (
            "t1,Groceries,90.00,2025-03-01T10:00:00,Ann,Ann;Bob;Cy"
        )

    def test_highlights(self, ledger):
        result = runner.invoke(app, ["highlights", str(ledger)])

        assert result.exit_code == 0
        assert "Total spent: $90.00" in result.output
        assert "Top spender: Ann" in result.output

    def test_context(self, ledger):
        result = runner.invoke(app, ["context", str(ledger)])

        assert result.exit_code == 0
        assert '## Group: "Flat" (USD)' in result.output
        assert "- Bob owes Ann $30.00" in result.output

    def test_validate_clean(self, ledger):
        result = runner.invoke(app, ["validate", str(ledger)])

        assert result.exit_code == 0
        assert "well-formed" in result.output

    def test_validate_reports_issues(self, skewed_ledger):
        result = runner.invoke(app, ["validate", str(skewed_ledger)])

        assert result.exit_code == 1
        assert "exact shares total 200" in result.output
