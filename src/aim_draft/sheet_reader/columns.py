"""
Spreadsheet column labels (A, B, ..., Z, AA, ...) to zero-based indices.
"""

import re

_LABEL_RE = re.compile(r"[A-Z]+")


def is_column_label(label: str) -> bool:
    """True for a non-empty run of uppercase ASCII letters."""
    return bool(_LABEL_RE.fullmatch(label or ""))


def column_label_to_index(label: str) -> int:
    """A → 0, Z → 25, AA → 26, AZ → 51. Callers pass validated labels only."""
    index = 0
    for ch in label:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1
