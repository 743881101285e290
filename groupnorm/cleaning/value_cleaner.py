"""
ValueCleaner: scalar normalisation for raw workbook cells.

Responsibilities:
- Cell-level string conversion (``cell_to_str``)
- Sentinel-null detection against a configurable lexicon
- Stripping column labels that leaked into cell values
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional, Tuple

import pandas as pd

from groupnorm.rules import DEFAULT_RULES, NormalizationRules

_LABEL_SEPARATORS = " \t:;=>"


def cell_to_str(value: Any) -> str:
    """Convert an arbitrary cell value to trimmed text ("" for missing)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return str(value)
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, (datetime, date, pd.Timestamp)):
        if isinstance(value, datetime):
            return value.isoformat(sep=" ", timespec="seconds")
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    # Rich-text objects from openpyxl may expose .plain or .text
    plain_attr = getattr(value, "plain", None)
    if isinstance(plain_attr, str):
        return plain_attr.strip()
    text_attr = getattr(value, "text", None)
    if isinstance(text_attr, str):
        return text_attr.strip()
    return str(value).strip()


class ValueCleaner:
    """
    Normalises one raw scalar into clean text or ``None``.

    ``clean`` is idempotent: cleaning a cleaned value returns it unchanged.
    """

    def __init__(self, rules: NormalizationRules = DEFAULT_RULES):
        self._sentinels = frozenset(s.strip().lower() for s in rules.sentinels if s.strip())
        self._prefixes: Tuple[Tuple[str, re.Pattern], ...] = tuple(
            (p, re.compile(re.escape(p.strip()) + r"(?!\w)", re.IGNORECASE))
            for p in rules.label_prefixes
            if p.strip()
        )

    def is_sentinel(self, text: str) -> bool:
        return text.strip().lower() in self._sentinels

    def _strip_label(self, text: str) -> Optional[str]:
        for _, pattern in self._prefixes:
            m = pattern.match(text)
            if m:
                return text[m.end():].lstrip(_LABEL_SEPARATORS)
        return None

    def clean(self, raw: Any) -> Optional[str]:
        text = cell_to_str(raw)
        while True:
            text = text.strip()
            if not text or self.is_sentinel(text):
                return None
            stripped = self._strip_label(text)
            if stripped is None:
                return text
            text = stripped


_default_cleaner = ValueCleaner()


def clean(raw: Any) -> Optional[str]:
    """Clean *raw* with the default lexicon."""
    return _default_cleaner.clean(raw)
