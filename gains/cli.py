"""
gains/cli.py
============
Load the accounts, fetch a quote for every symbol, print the tables.

No flags and no prompts: the config file under ~/.local/share is the only
input. A broken config ends the run before any request goes out.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gains import display
from gains.config import ConfigError, load_accounts
from gains.models import symbols_of
from gains.prices import QuoteFetcher

console     = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class CLI:
    """Single-shot command-line run."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 fetcher: Optional[QuoteFetcher] = None,
                 out: Optional[Console] = None,
                 err: Optional[Console] = None):
        self.config_path = config_path
        self.fetcher     = fetcher or QuoteFetcher()
        self.out         = out or console
        self.err         = err or err_console

    def run(self) -> int:
        try:
            accounts = load_accounts(self.config_path)
        except ConfigError as e:
            self.err.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
            return 1

        if not accounts:
            self.out.print(f"[{display.MUTED}]No accounts configured.[/{display.MUTED}]")
            return 0

        symbols = symbols_of(accounts)
        logger.debug("Fetching %d symbol(s)", len(symbols))
        with self.err.status("[dim]Fetching live prices...[/dim]"):
            quotes = self.fetcher.fetch(symbols)

        display.print_accounts(accounts, quotes, out=self.out)
        return 0
