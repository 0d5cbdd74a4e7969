"""
gains/display.py
================
Renders per-account gain/loss tables in the terminal using the `rich` library.

Tables are built without touching the console, so the same accounts and
quotes always produce the same text. print_accounts() is the only writer.
"""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.markup import escape

from gains.models import Account, Holding, Quote, QuoteTable


console = Console()

# ── Palette ─────────────────────────────────────────────────────────────────
GAIN   = "green"
LOSS   = "red"
MUTED  = "grey62"
ACCENT = "steel_blue1"
HEAD   = "bold"

NA = "N/A"


# ── Formatters ───────────────────────────────────────────────────────────────

def _colour(value: float, text: str) -> str:
    style = LOSS if value < 0 else GAIN
    return f"[{style}]{text}[/{style}]"

def _cur(value: float) -> str:
    return f"${value:,.2f}"

def _pct(value: Optional[float]) -> str:
    if value is None:
        return f"[{MUTED}]{NA}[/{MUTED}]"
    return _colour(value, f"{value:.2f}%")


# ── Tables ───────────────────────────────────────────────────────────────────

def _new_table() -> Table:
    table = Table(
        box=None,
        show_header=True,
        header_style=HEAD,
        show_edge=False,
        pad_edge=True,
        padding=(0, 1),
    )
    table.add_column("Symbol",  min_width=8, no_wrap=True)
    table.add_column("Price",   justify="right", min_width=10, no_wrap=True)
    table.add_column("Net",     justify="right", min_width=10, no_wrap=True)
    table.add_column("Net %",   justify="right", min_width=8,  no_wrap=True)
    table.add_column("Total",   justify="right", min_width=12, no_wrap=True)
    table.add_column("Total %", justify="right", min_width=8,  no_wrap=True)
    return table


def holding_row(holding: Holding, quote: Quote) -> List[str]:
    gain  = holding.intraday_gain(quote)
    total = holding.total_gain(quote)
    return [
        holding.symbol,
        _cur(quote.price),
        _colour(gain, _cur(gain)),
        _pct(holding.intraday_percent(quote)),
        _colour(total, _cur(total)),
        _pct(holding.total_percent(quote)),
    ]


def build_account_table(account: Account, quotes: QuoteTable) -> Table:
    table = _new_table()
    for h in account.holdings:
        table.add_row(*holding_row(h, quotes.get(h.symbol, Quote.ZERO)))

    if account.holdings:
        day   = account.day_gain(quotes)
        total = account.total_gain(quotes)
        table.add_section()
        table.add_row(
            f"[{MUTED}]Total[/{MUTED}]",
            f"[{MUTED}]{_cur(account.market_value(quotes))}[/{MUTED}]",
            _colour(day, _cur(day)),
            "",
            _colour(total, _cur(total)),
            _pct(account.total_percent(quotes)),
        )
    return table


def print_accounts(accounts: List[Account], quotes: QuoteTable,
                   out: Optional[Console] = None) -> None:
    out = out or console
    for account in accounts:
        out.print(f"[{ACCENT}]{escape(account.name)}[/{ACCENT}]:", highlight=False)
        if not account.holdings:
            out.print(f"  [{MUTED}]No holdings.[/{MUTED}]")
            continue
        out.print(build_account_table(account, quotes), highlight=False)
