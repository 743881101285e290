"""
Centralised normalization rules.

Every lexicon, keyword list and threshold used by the cleaner and the
classifier lives here, so the rest of the code stays free of hard-coded
values. ``groupnorm.rules_loader`` can layer a YAML file on top of
``DEFAULT_RULES``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from groupnorm.models import GroupType, RiskLevel

SCOPE_SHEET = "sheet"
SCOPE_NAME = "name"


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str, whole_word: bool) -> Pattern[str]:
    body = re.escape(keyword.lower())
    if whole_word:
        body = rf"(?<!\w){body}(?!\w)"
    return re.compile(body)


def contains_keyword(text: str, keywords: Tuple[str, ...], whole_word: bool = False) -> bool:
    """Case-insensitive match of any keyword inside *text*."""
    haystack = (text or "").lower()
    if not haystack:
        return False
    for kw in keywords:
        if not kw:
            continue
        if whole_word:
            if _keyword_pattern(kw, True).search(haystack):
                return True
        elif kw.lower() in haystack:
            return True
    return False


# ---------------------------------------------------------------------------
# Rule records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeRule:
    """``scope`` is ``"sheet"`` or ``"name"``; first matching rule wins."""

    scope: str
    keywords: Tuple[str, ...]
    result: GroupType
    whole_word: bool = False

    def matches(self, sheet_name: str, name: str) -> bool:
        text = sheet_name if self.scope == SCOPE_SHEET else name
        return contains_keyword(text, self.keywords, self.whole_word)


@dataclass(frozen=True)
class RiskRule:
    """
    Every condition that is set must hold (logical AND):
      - ``name_keywords``: the entity name contains one of them
      - ``sheet_keywords``: the sheet name contains one of them
      - ``members_over``: member count strictly greater than this
    """

    label: str
    result: RiskLevel
    name_keywords: Tuple[str, ...] = ()
    sheet_keywords: Tuple[str, ...] = ()
    members_over: Optional[int] = None
    whole_word: bool = False

    def matches(self, sheet_name: str, name: str, members: int) -> bool:
        if not (self.name_keywords or self.sheet_keywords or self.members_over is not None):
            return False
        if self.name_keywords and not contains_keyword(name, self.name_keywords, self.whole_word):
            return False
        if self.sheet_keywords and not contains_keyword(sheet_name, self.sheet_keywords, self.whole_word):
            return False
        if self.members_over is not None and not members > self.members_over:
            return False
        return True


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

# Observed "no data" tokens in the source workbook, typos included.
DEFAULT_SENTINELS: Tuple[str, ...] = (
    "nil", "nill", "null", "na", "n/a", "not manation", "-",
)

# Column labels that leaked into cell values.
DEFAULT_LABEL_PREFIXES: Tuple[str, ...] = (
    "Linked E-Mail ID",
)

DEFAULT_PLATFORM_ORDER: Tuple[str, ...] = ("facebook", "twitter", "instagram", "youtube")

DEFAULT_TYPE_RULES: Tuple[TypeRule, ...] = (
    # sheet provenance
    TypeRule(SCOPE_SHEET, ("hindu",), GroupType.RELIGIOUS),
    TypeRule(SCOPE_SHEET, ("muslim",), GroupType.RELIGIOUS),
    TypeRule(SCOPE_SHEET, ("christian",), GroupType.RELIGIOUS),
    TypeRule(SCOPE_SHEET, ("political",), GroupType.POLITICAL),
    TypeRule(SCOPE_SHEET, ("student",), GroupType.SOCIAL),
    TypeRule(SCOPE_SHEET, ("woman", "women"), GroupType.SOCIAL),
    TypeRule(SCOPE_SHEET, ("farmer",), GroupType.PROFESSIONAL),
    TypeRule(SCOPE_SHEET, ("trade union",), GroupType.PROFESSIONAL),
    TypeRule(SCOPE_SHEET, ("human rights",), GroupType.SOCIAL),
    TypeRule(SCOPE_SHEET, ("kannad",), GroupType.CULTURAL),
    # free-text name
    TypeRule(SCOPE_NAME, ("hindu", "muslim", "christian", "ಹಿಂದೂ"), GroupType.RELIGIOUS),
    TypeRule(SCOPE_NAME, ("bjp", "congress", "political", "ಬಿಜೆಪಿ"), GroupType.POLITICAL),
    TypeRule(SCOPE_NAME, ("student", "youth", "ಯುವ"), GroupType.SOCIAL),
    TypeRule(SCOPE_NAME, ("farmer", "union"), GroupType.PROFESSIONAL),
)

DEFAULT_RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule("militant_name", RiskLevel.HIGH, name_keywords=("militant", "ಸೇನೆ", "ದಳ")),
    RiskRule("outfit_name", RiskLevel.HIGH, name_keywords=("sena", "dal")),
    RiskRule("right_wing_sheet", RiskLevel.HIGH, sheet_keywords=("right wing",)),
    RiskRule("large_membership", RiskLevel.MEDIUM, members_over=50_000),
    RiskRule(
        "large_religious",
        RiskLevel.MEDIUM,
        name_keywords=("hindu", "muslim", "ಹಿಂದೂ"),
        members_over=10_000,
    ),
)


@dataclass(frozen=True)
class NormalizationRules:
    """Immutable bag of lexicons and rule tables used by a run."""

    sentinels: Tuple[str, ...] = DEFAULT_SENTINELS
    label_prefixes: Tuple[str, ...] = DEFAULT_LABEL_PREFIXES
    placeholder_name: str = "Unnamed Group"
    platform_order: Tuple[str, ...] = DEFAULT_PLATFORM_ORDER
    type_rules: Tuple[TypeRule, ...] = DEFAULT_TYPE_RULES
    default_type: GroupType = GroupType.OTHER
    risk_rules: Tuple[RiskRule, ...] = DEFAULT_RISK_RULES
    default_risk: RiskLevel = RiskLevel.LOW


# Singleton default rules
DEFAULT_RULES = NormalizationRules()
