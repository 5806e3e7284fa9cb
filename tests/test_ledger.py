"""Tests for ledger file loading and settings."""

import json

import pytest

from splitledger.config import Settings, load_settings
from splitledger.exceptions import ConfigurationError, LedgerFileError
from splitledger.ledger import dump_group, load_group
from splitledger.models import ExactSplit, Group, Member, PercentageSplit, Transaction


@pytest.fixture
def ledger_data():
    """Raw JSON ledger with one transaction per split mode."""
    return {
        "id": "g1",
        "name": "Flat",
        "currency": "USD",
        "members": [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Bob"}],
        "transactions": [
            {
                "id": "t1",
                "amount": 1000,
                "payer_id": "a",
                "participant_ids": ["a", "b"],
            },
            {
                "id": "t2",
                "amount": 1000,
                "payer_id": "b",
                "participant_ids": ["a", "b"],
                "split": {"mode": "exact", "shares": {"a": 400, "b": 600}},
            },
            {
                "id": "t3",
                "amount": 1000,
                "payer_id": "b",
                "participant_ids": ["a", "b"],
                "split": {"mode": "percentage", "percentages": {"a": 30, "b": 70}},
                "occurred_at": "2025-03-01T10:00:00",
            },
        ],
    }


class TestLoadGroup:
    def test_load_parses_split_variants(self, tmp_path, ledger_data):
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps(ledger_data))

        group = load_group(path)

        assert group.name == "Flat"
        assert group.transactions[0].split.mode == "equal"
        assert isinstance(group.transactions[1].split, ExactSplit)
        assert group.transactions[1].split.shares == {"a": 400, "b": 600}
        assert isinstance(group.transactions[2].split, PercentageSplit)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LedgerFileError, match="Could not read ledger"):
            load_group(tmp_path / "nope.json")

    def test_invalid_split_mode(self, tmp_path, ledger_data):
        ledger_data["transactions"][0]["split"] = {"mode": "shares"}
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps(ledger_data))

        with pytest.raises(LedgerFileError, match="Invalid ledger"):
            load_group(path)

    def test_negative_amount_rejected(self, tmp_path, ledger_data):
        ledger_data["transactions"][0]["amount"] = -5
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps(ledger_data))

        with pytest.raises(LedgerFileError):
            load_group(path)

    @pytest.mark.parametrize("bad", ["NaN", "Infinity", "-50", "250"])
    def test_invalid_percentage_rejected(self, tmp_path, ledger_data, bad):
        ledger_data["transactions"][2]["split"]["percentages"]["a"] = "PLACEHOLDER"
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps(ledger_data).replace('"PLACEHOLDER"', bad))

        with pytest.raises(LedgerFileError, match="Invalid ledger"):
            load_group(path)

    def test_dump_then_load(self, tmp_path):
        group = Group(
            id="g",
            name="Trip",
            members=[Member(id="a", name="Ann")],
            transactions=[
                Transaction(id="t", amount=10, payer_id="a", participant_ids=["a"])
            ],
        )
        path = tmp_path / "nested" / "ledger.json"

        dump_group(group, path)

        assert load_group(path) == group


class TestSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.ledger_path is None
        assert settings.default_currency == "USD"
        assert settings.strict_splits is False
        assert settings.recent_transactions_limit == 20

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SPLITLEDGER_STRICT_SPLITS", "true")
        monkeypatch.setenv("SPLITLEDGER_DEFAULT_CURRENCY", "EUR")
        monkeypatch.setenv("SPLITLEDGER_LEDGER_PATH", str(tmp_path / "l.json"))

        settings = load_settings()

        assert settings.strict_splits is True
        assert settings.default_currency == "EUR"
        assert settings.ledger_path == tmp_path / "l.json"

    def test_invalid_env_raises_configuration_error(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SPLITLEDGER_RECENT_TRANSACTIONS_LIMIT", "many")

        with pytest.raises(ConfigurationError, match="Failed to load settings"):
            load_settings()
