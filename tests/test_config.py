"""Tests for the config loader and its validation rules."""

from pathlib import Path

import pytest

from gains.config import ConfigError, default_config_path, load_accounts
from gains.models import Holding
from gains.validation import validate_holding, validate_number, validate_ticker


TOML = """
[Brokerage]
VTI  = { num = 3.5, price = 201.10 }
AAPL = { num = 10, price = 142 }

[IRA]
SCHD = { quantity = 20, cost_basis = 70.25 }
"""


def _write(tmp_path: Path, text: str, name: str = "stocks.toml") -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


class TestLoadAccounts:
    """Loading accounts from TOML and YAML files."""

    def test_accounts_and_holdings_keep_file_order(self, tmp_path):
        accounts = load_accounts(_write(tmp_path, TOML))

        assert [a.name for a in accounts] == ["Brokerage", "IRA"]
        assert accounts[0].holdings == (
            Holding("VTI", 3.5, 201.10),
            Holding("AAPL", 10.0, 142.0),
        )
        assert accounts[1].holdings == (Holding("SCHD", 20.0, 70.25),)

    def test_integer_values_become_floats(self, tmp_path):
        accounts = load_accounts(_write(tmp_path, TOML))
        aapl = accounts[0].holdings[1]
        assert isinstance(aapl.quantity, float)
        assert isinstance(aapl.cost_basis, float)

    def test_yaml_file(self, tmp_path):
        text = "Roth:\n  QQQ:\n    num: 2\n    price: 350.5\n"
        accounts = load_accounts(_write(tmp_path, text, "stocks.yaml"))

        assert accounts[0].name == "Roth"
        assert accounts[0].holdings == (Holding("QQQ", 2.0, 350.5),)

    def test_empty_file_has_no_accounts(self, tmp_path):
        assert load_accounts(_write(tmp_path, "")) == []

    def test_account_with_no_holdings(self, tmp_path):
        accounts = load_accounts(_write(tmp_path, "[Empty]\n"))
        assert accounts[0].holdings == ()

    def test_default_path_is_under_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".local" / "share" / "stocks.toml"


class TestConfigErrors:
    """Every malformed config is fatal."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_accounts(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid TOML"):
            load_accounts(_write(tmp_path, "[Brokerage\nVTI = "))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_accounts(_write(tmp_path, "a: [1, 2\n", "stocks.yml"))

    def test_yaml_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="top level"):
            load_accounts(_write(tmp_path, "- a\n- b\n", "stocks.yaml"))

    def test_account_must_be_table(self, tmp_path):
        with pytest.raises(ConfigError, match="account 'Brokerage'"):
            load_accounts(_write(tmp_path, 'Brokerage = "VTI"\n'))

    def test_missing_cost_basis(self, tmp_path):
        with pytest.raises(ConfigError, match="missing 'price'"):
            load_accounts(_write(tmp_path, "[Brokerage]\nVTI = { num = 3 }\n"))

    def test_missing_quantity(self, tmp_path):
        with pytest.raises(ConfigError, match="missing 'num'"):
            load_accounts(_write(tmp_path, "[Brokerage]\nVTI = { price = 3.0 }\n"))

    def test_non_numeric_field(self, tmp_path):
        with pytest.raises(ConfigError, match="holding 'VTI'"):
            load_accounts(_write(tmp_path, '[Brokerage]\nVTI = { num = "three", price = 1.0 }\n'))

    def test_holding_must_be_table(self, tmp_path):
        with pytest.raises(ConfigError, match="must be a table"):
            load_accounts(_write(tmp_path, "[Brokerage]\nVTI = 3\n"))


class TestValidation:
    """Field validators return lists of error strings."""

    def test_valid_tickers(self):
        for t in ("AAPL", "BRK.B", "BF-B", "^GSPC"):
            assert validate_ticker(t) == []

    def test_bad_tickers(self):
        assert validate_ticker("") != []
        assert validate_ticker("AA PL") != []
        assert validate_ticker("A" * 13) != []
        assert validate_ticker(42) != []

    def test_numbers(self):
        assert validate_number("num", 1) == []
        assert validate_number("num", 0.0) == []
        assert validate_number("num", True) != []
        assert validate_number("num", -1.0) != []
        assert validate_number("num", float("nan")) != []
        assert validate_number("num", "1") != []

    def test_holding_collects_every_error(self):
        errors = validate_holding("BAD TICKER", {"num": -1})
        assert len(errors) == 3

    def test_yaml_boolean_ticker_names_the_cause(self, tmp_path):
        """Bare ON in YAML is a boolean, not ON Semiconductor."""
        text = "Brokerage:\n  ON: { num: 5, price: 61.2 }\n"
        with pytest.raises(ConfigError, match="YAML boolean or number"):
            load_accounts(_write(tmp_path, text, "stocks.yaml"))

    def test_quoted_yaml_ticker_loads(self, tmp_path):
        text = 'Brokerage:\n  "ON": { num: 5, price: 61.2 }\n'
        accounts = load_accounts(_write(tmp_path, text, "stocks.yaml"))
        assert accounts[0].holdings == (Holding("ON", 5.0, 61.2),)
