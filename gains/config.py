"""
gains/config.py  -  Load accounts and holdings from the local config file

The file maps account name -> ticker -> {num, price}:

    [Brokerage]
    AAPL = { num = 10, price = 142.50 }
    VTI  = { num = 3.5, price = 201.10 }

TOML is the default; .yaml / .yml files are read with PyYAML. YAML reads bare
keys such as ON, YES, NO or 0700 as booleans and numbers, so quote them:

    Brokerage:
      "ON": { num: 5, price: 61.20 }

Any problem raises ConfigError. There is no partial load.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from gains.models import Account, Holding
from gains.validation import holding_fields, validate_holding

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".local") / "share" / "stocks.toml"
YAML_SUFFIXES       = (".yaml", ".yml")


class ConfigError(Exception):
    """The config file is missing, unreadable or malformed."""


def default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_PATH


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e


def read_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse the raw account mapping."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {p}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {p}: {e}") from e

    data = _parse(p, text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p}: top level must map account names to holdings.")
    return data


def parse_accounts(data: Dict[str, Any], source: str = "config") -> List[Account]:
    """Turn the raw mapping into Accounts, in file order."""
    accounts = []
    for name, holdings in data.items():
        if not isinstance(holdings, dict):
            raise ConfigError(f"{source}: account '{name}' must be a table of holdings.")

        parsed = []
        for symbol, info in holdings.items():
            errors = validate_holding(symbol, info)
            if errors:
                raise ConfigError(
                    f"{source}: account '{name}', holding '{symbol}': " + " ".join(errors)
                )
            quantity, cost_basis = holding_fields(info)
            parsed.append(Holding(symbol=symbol.strip(), quantity=quantity,
                                  cost_basis=cost_basis))

        accounts.append(Account(name=str(name), holdings=tuple(parsed)))
    return accounts


def load_accounts(path: Optional[Union[str, Path]] = None) -> List[Account]:
    p = Path(path) if path is not None else default_config_path()
    accounts = parse_accounts(read_config(p), source=str(p))
    logger.debug("Loaded %d account(s) from %s", len(accounts), p)
    return accounts
