"""
Helper Utilities
================
Common utility functions used across the engine.
"""

from typing import Optional


def format_currency(amount: Optional[float], currency: str = "COP") -> str:
    """
    Format a currency amount with proper formatting.

    Args:
        amount: Numeric amount
        currency: Currency code (COP, USD)

    Returns:
        Formatted currency string
    """
    if amount is None:
        return "N/A"

    try:
        return f"{currency} {amount:,.2f}"
    except (ValueError, TypeError):
        return f"{currency} {amount}"


def normalize_label(value: str) -> str:
    """
    Normalize a client or risk-line label for equality checks.

    Args:
        value: Raw label

    Returns:
        Lower-cased label without surrounding whitespace
    """
    return value.strip().lower()
