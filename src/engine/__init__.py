"""Accrual engine."""

from .accrual import accrue, evaluate_market, quote_matches

__all__ = ["accrue", "evaluate_market", "quote_matches"]
