"""
gains/validation.py  -  Config field validation rules

All validators return a list of error strings (empty = valid).
Keeping rules here means config.py just calls validate_*() and reports
the results, no field rules scattered through the loader.
"""

import math
import re
from typing import Any, List, Mapping

# Tickers that look obviously wrong
_BAD_TICKER_CHARS = re.compile(r'[^A-Za-z0-9.\-/^]')
_MAX_TICKER_LEN   = 12

# Accepted spellings for each holding field, first one is canonical
QUANTITY_KEYS   = ("num", "quantity")
COST_BASIS_KEYS = ("price", "cost_basis")


def validate_ticker(ticker: Any) -> List[str]:
    errors = []
    if isinstance(ticker, (bool, int, float)):
        errors.append(f"Ticker {ticker!r} was read as a YAML boolean or number. "
                      f"Quote it, e.g. 'ON': or '0700':.")
        return errors
    if not isinstance(ticker, str):
        errors.append(f"Ticker {ticker!r} must be a string.")
        return errors
    t = ticker.strip()
    if not t:
        errors.append("Ticker symbol cannot be empty.")
        return errors
    if len(t) > _MAX_TICKER_LEN:
        errors.append(f"Ticker '{t}' is too long (max {_MAX_TICKER_LEN} characters).")
    if _BAD_TICKER_CHARS.search(t):
        errors.append(f"Ticker '{t}' contains invalid characters. "
                      f"Only letters, numbers, '.', '-', '/' and '^' are allowed.")
    return errors


def validate_number(label: str, value: Any) -> List[str]:
    """A finite, non-negative int or float. Booleans don't count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return [f"'{label}' must be a number, got {value!r}."]
    if not math.isfinite(value):
        return [f"'{label}' must be finite, got {value!r}."]
    if value < 0:
        return [f"'{label}' cannot be negative, got {value!r}."]
    return []


def _pick(info: Mapping, keys) -> Any:
    for k in keys:
        if k in info:
            return info[k]
    return None


def validate_holding(symbol: Any, info: Any) -> List[str]:
    errors = validate_ticker(symbol)
    if not isinstance(info, Mapping):
        errors.append(f"Holding '{symbol}' must be a table with "
                      f"'{QUANTITY_KEYS[0]}' and '{COST_BASIS_KEYS[0]}'.")
        return errors

    for keys in (QUANTITY_KEYS, COST_BASIS_KEYS):
        value = _pick(info, keys)
        if value is None:
            errors.append(f"Holding '{symbol}' is missing '{keys[0]}'.")
        else:
            errors += validate_number(keys[0], value)
    return errors


def holding_fields(info: Mapping) -> tuple:
    """(quantity, cost_basis) from an already-validated holding table."""
    return (float(_pick(info, QUANTITY_KEYS)),
            float(_pick(info, COST_BASIS_KEYS)))
