"""
Stock Gains - Main Entry Point
==============================
Prints today's and total gains for every account in ~/.local/share/stocks.toml.
Usage: python main.py
"""

import sys

from gains.cli import CLI, setup_logging


def main():
    setup_logging()
    sys.exit(CLI().run())


if __name__ == "__main__":
    main()
