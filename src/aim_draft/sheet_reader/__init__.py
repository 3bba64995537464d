"""
Release-date lookup in the master Google Sheet (API key access).
"""

from .columns import column_label_to_index, is_column_label
from .reader import TabularRange, find_release_date

__all__ = ["column_label_to_index", "is_column_label", "TabularRange", "find_release_date"]
