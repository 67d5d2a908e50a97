"""Medical transport booking reconciliation and valuation service."""

__version__ = "1.0.0"
