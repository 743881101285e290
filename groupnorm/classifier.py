"""
Rule-based classification of groups.

Both functions walk an ordered rule table from ``NormalizationRules``;
the first matching rule wins and a default closes the table, so neither
function can fail. They depend only on their arguments.
"""

from __future__ import annotations

from typing import Optional

from groupnorm.models import GroupType, RiskLevel
from groupnorm.rules import DEFAULT_RULES, SCOPE_NAME, SCOPE_SHEET, NormalizationRules


def determine_type(
    sheet_name: Optional[str],
    name: Optional[str],
    rules: NormalizationRules = DEFAULT_RULES,
) -> GroupType:
    """Sheet-scoped rules are tried before name-scoped ones."""
    sheet_name = sheet_name or ""
    name = name or ""
    for scope in (SCOPE_SHEET, SCOPE_NAME):
        for rule in rules.type_rules:
            if rule.scope == scope and rule.matches(sheet_name, name):
                return rule.result
    return rules.default_type


def determine_risk_level(
    sheet_name: Optional[str],
    name: Optional[str],
    members: Optional[int],
    rules: NormalizationRules = DEFAULT_RULES,
) -> RiskLevel:
    try:
        count = int(members or 0)
    except (TypeError, ValueError):
        count = 0
    for rule in rules.risk_rules:
        if rule.matches(sheet_name or "", name or "", count):
            return rule.result
    return rules.default_risk
