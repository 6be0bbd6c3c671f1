"""
Utilities Package
=================
Helper utilities and common functions.
"""

from .helpers import format_currency, normalize_label

__all__ = [
    "format_currency",
    "normalize_label"
]
