"""Household finance ledger with running savings, adjustments and balance forecasts."""

__version__ = "0.1.0"