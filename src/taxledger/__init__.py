"""Capital-gains tax ledger for equity portfolios."""

__version__ = "1.0.0"
