"""
gains/prices.py  -  Live quote fetching from the NASDAQ quote API

Every symbol is looked up as a stock first and as an ETF second. A symbol
that fails both ways gets Quote.ZERO, so fetch() always returns one quote
per symbol it was given.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Iterable, Optional

import requests

from gains.models import Quote, QuoteTable

logger = logging.getLogger(__name__)

QUOTE_URL = "https://api.nasdaq.com/api/quote/{symbol}/info"

# The endpoint rejects clients without a browser-looking signature
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/85.0.4183.121 Safari/537.36"
    ),
    "Accept":          "*/*",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection":      "keep-alive",
}

ASSET_CLASSES       = ("stocks", "etf")
DEFAULT_TIMEOUT     = 10.0   # seconds, per HTTP request
DEFAULT_MAX_WORKERS = 8


# ── Parsing ──────────────────────────────────────────────────────────────────

def _to_float(text: str) -> Optional[float]:
    # float() would take "1_000"
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_price(text: Any) -> Optional[float]:
    """'$1,234.50' -> 1234.5. Anything without the leading '$' is rejected."""
    if not isinstance(text, str) or not text.startswith("$"):
        return None
    return _to_float(text[1:].replace(",", ""))


def parse_change(text: Any) -> Optional[float]:
    if not isinstance(text, str):
        return None
    return _to_float(text.replace(",", ""))


def parse_quote(payload: Any) -> Optional[Quote]:
    """Pull price and net change out of data.primaryData, or None."""
    try:
        primary = payload["data"]["primaryData"]
        price   = parse_price(primary["lastSalePrice"])
        change  = parse_change(primary["netChange"])
    except (KeyError, TypeError):
        return None
    if price is None or change is None:
        return None
    return Quote(price=price, net_change=change)


# ── Fetcher ──────────────────────────────────────────────────────────────────

class QuoteFetcher:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 max_workers: int = DEFAULT_MAX_WORKERS,
                 fetch_timeout: Optional[float] = None):
        self.timeout       = timeout
        self.max_workers   = max(1, max_workers)
        self.fetch_timeout = fetch_timeout

    def deadline(self, count: int) -> float:
        """Overall wait for `count` lookups unless fetch_timeout overrides it."""
        if self.fetch_timeout is not None:
            return self.fetch_timeout
        # one stock attempt + one etf attempt per symbol, in rounds of max_workers
        rounds = math.ceil(count / self.max_workers)
        return rounds * (2 * self.timeout) + 5

    def get_quote(self, symbol: str, asset_class: str) -> Optional[Quote]:
        """One GET against the endpoint. Never raises; None means no result."""
        url = QUOTE_URL.format(symbol=symbol)
        try:
            resp = requests.get(url, params={"assetclass": asset_class},
                                headers=HEADERS, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug("%s (%s): request failed: %s", symbol, asset_class, e)
            return None

        quote = parse_quote(payload)
        if quote is None:
            logger.debug("%s (%s): no usable quote in response", symbol, asset_class)
        return quote

    def lookup(self, symbol: str) -> Quote:
        """Stock first, then ETF, then Quote.ZERO."""
        for asset_class in ASSET_CLASSES:
            quote = self.get_quote(symbol, asset_class)
            if quote is not None:
                return quote
        logger.info("No quote for %s, using zero", symbol)
        return Quote.ZERO

    def fetch(self, symbols: Iterable[str]) -> QuoteTable:
        """Look up every distinct symbol concurrently and wait for all of them."""
        unique = {s.strip() for s in symbols if s and s.strip()}
        if not unique:
            return {}

        deadline = self.deadline(len(unique))
        pool = ThreadPoolExecutor(max_workers=min(self.max_workers, len(unique)),
                                  thread_name_prefix="quotes")
        try:
            futures = {pool.submit(self.lookup, s): s for s in unique}
            done, pending = wait(futures, timeout=deadline)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        quotes: QuoteTable = {}
        for future in done:
            quotes[futures[future]] = future.result()
        for future in pending:
            symbol = futures[future]
            logger.warning("Timeout after %ss fetching %s", deadline, symbol)
            quotes[symbol] = Quote.ZERO
        return quotes
