"""
gains/models.py  -  Pure dataclasses, no dependencies on other gains modules.

Holding / Account come from the config file, Quote from the market-data
endpoint. Everything is frozen: loaded once, read many times.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, List, Optional, Set, Tuple


@dataclass(frozen=True)
class Quote:
    price:      float   # last sale price
    net_change: float   # absolute change since prior close

    ZERO: ClassVar["Quote"]

    @property
    def prior_close(self) -> float:
        return self.price - self.net_change


Quote.ZERO = Quote(0.0, 0.0)

QuoteTable = Dict[str, Quote]


def _percent(gain: float, base: float) -> Optional[float]:
    """gain / base as a percentage, or None when base is zero."""
    if base == 0:
        return None
    return gain / base * 100


@dataclass(frozen=True)
class Holding:
    symbol:     str
    quantity:   float
    cost_basis: float   # price per unit at acquisition

    @property
    def cost_value(self) -> float:
        return self.cost_basis * self.quantity

    def market_value(self, quote: Quote) -> float:
        return quote.price * self.quantity

    def intraday_gain(self, quote: Quote) -> float:
        return quote.net_change * self.quantity

    def intraday_percent(self, quote: Quote) -> Optional[float]:
        """Today's move relative to the prior close (price minus net change)."""
        return _percent(quote.net_change, quote.prior_close)

    def total_gain(self, quote: Quote) -> float:
        return (quote.price - self.cost_basis) * self.quantity

    def total_percent(self, quote: Quote) -> Optional[float]:
        return _percent(self.market_value(quote) - self.cost_value, self.cost_value)


@dataclass(frozen=True)
class Account:
    name:     str
    holdings: Tuple[Holding, ...] = field(default_factory=tuple)

    def symbols(self) -> List[str]:
        """Distinct symbols in holding order."""
        seen: List[str] = []
        for h in self.holdings:
            if h.symbol not in seen:
                seen.append(h.symbol)
        return seen

    def _quote(self, quotes: QuoteTable, holding: Holding) -> Quote:
        return quotes.get(holding.symbol, Quote.ZERO)

    def cost_value(self) -> float:
        return sum(h.cost_value for h in self.holdings)

    def market_value(self, quotes: QuoteTable) -> float:
        return sum(h.market_value(self._quote(quotes, h)) for h in self.holdings)

    def day_gain(self, quotes: QuoteTable) -> float:
        return sum(h.intraday_gain(self._quote(quotes, h)) for h in self.holdings)

    def total_gain(self, quotes: QuoteTable) -> float:
        return sum(h.total_gain(self._quote(quotes, h)) for h in self.holdings)

    def total_percent(self, quotes: QuoteTable) -> Optional[float]:
        return _percent(self.total_gain(quotes), self.cost_value())


def symbols_of(accounts: Iterable[Account]) -> Set[str]:
    """Every distinct symbol held in any account."""
    return {s for a in accounts for s in a.symbols()}
