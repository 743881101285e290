"""
Rules loader
============

Loads classification rules and cleaning lexicons from a YAML file and
layers them on top of ``DEFAULT_RULES``.

Example file::

    sentinels: ["not mentioned", "none"]      # appended to the defaults
    label_prefixes: ["Email ID"]               # appended to the defaults
    thresholds:                                # keyed by risk rule label
      large_membership: 75000
    type_rules:                                # replaces the default table
      - {scope: sheet, keywords: [hindu], result: religious}
    risk_rules:                                # replaces the default table
      - {label: outfit_name, result: high, name_keywords: [sena], whole_word: true}
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from groupnorm.logger import get_logger
from groupnorm.models import GroupType, RiskLevel
from groupnorm.rules import (
    DEFAULT_RULES,
    SCOPE_NAME,
    SCOPE_SHEET,
    NormalizationRules,
    RiskRule,
    TypeRule,
)

logger = get_logger(__name__)

_VALID_SCOPES = {SCOPE_SHEET, SCOPE_NAME}


def _ensure_dict(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


def _ensure_str_list(value: Any) -> List[str]:
    """String items only, stripped, blanks dropped."""
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def _merge_unique(base: Tuple[str, ...], extra: List[str]) -> Tuple[str, ...]:
    seen = {b.lower() for b in base}
    merged = list(base)
    for item in extra:
        if item.lower() not in seen:
            seen.add(item.lower())
            merged.append(item)
    return tuple(merged)


def _parse_type_rule(raw: Any, idx: int) -> TypeRule:
    data = _ensure_dict(raw)
    scope = str(data.get("scope", "")).strip().lower()
    if scope not in _VALID_SCOPES:
        raise ValueError(f"type_rules[{idx}]: scope must be one of {sorted(_VALID_SCOPES)}, got {scope!r}")
    keywords = _ensure_str_list(data.get("keywords"))
    if not keywords:
        raise ValueError(f"type_rules[{idx}]: keywords must be a non-empty list")
    try:
        result = GroupType(str(data.get("result", "")).strip().lower())
    except ValueError:
        raise ValueError(f"type_rules[{idx}]: unknown result {data.get('result')!r}") from None
    return TypeRule(
        scope=scope,
        keywords=tuple(keywords),
        result=result,
        whole_word=bool(data.get("whole_word", False)),
    )


def _parse_risk_rule(raw: Any, idx: int) -> RiskRule:
    data = _ensure_dict(raw)
    label = data.get("label")
    if not isinstance(label, str) or not label.strip():
        label = f"rule_{idx + 1}"
    try:
        result = RiskLevel(str(data.get("result", "")).strip().lower())
    except ValueError:
        raise ValueError(f"risk_rules[{idx}]: unknown result {data.get('result')!r}") from None
    members_over = data.get("members_over")
    if members_over is not None and (isinstance(members_over, bool) or not isinstance(members_over, int)):
        raise ValueError(f"risk_rules[{idx}]: members_over must be an integer")
    rule = RiskRule(
        label=label.strip(),
        result=result,
        name_keywords=tuple(_ensure_str_list(data.get("name_keywords"))),
        sheet_keywords=tuple(_ensure_str_list(data.get("sheet_keywords"))),
        members_over=members_over,
        whole_word=bool(data.get("whole_word", False)),
    )
    if not (rule.name_keywords or rule.sheet_keywords or rule.members_over is not None):
        raise ValueError(f"risk_rules[{idx}]: rule {rule.label!r} has no condition")
    return rule


def _apply_thresholds(rules: Tuple[RiskRule, ...], thresholds: Dict[str, Any]) -> Tuple[RiskRule, ...]:
    if not thresholds:
        return rules
    known = {r.label for r in rules}
    for label in thresholds:
        if label not in known:
            logger.warning("Threshold for unknown risk rule %r ignored", label)
    out: List[RiskRule] = []
    for rule in rules:
        value = thresholds.get(rule.label)
        if isinstance(value, int) and not isinstance(value, bool):
            rule = replace(rule, members_over=value)
        elif value is not None:
            raise ValueError(f"thresholds.{rule.label} must be an integer")
        out.append(rule)
    return tuple(out)


def rules_from_dict(data: Dict[str, Any], base: NormalizationRules = DEFAULT_RULES) -> NormalizationRules:
    """Merge a parsed rules mapping onto *base*."""
    data = _ensure_dict(data)
    rules = base

    sentinels = _ensure_str_list(data.get("sentinels"))
    if sentinels:
        rules = replace(rules, sentinels=_merge_unique(rules.sentinels, [s.lower() for s in sentinels]))

    prefixes = _ensure_str_list(data.get("label_prefixes"))
    if prefixes:
        rules = replace(rules, label_prefixes=_merge_unique(rules.label_prefixes, prefixes))

    placeholder = data.get("placeholder_name")
    if isinstance(placeholder, str) and placeholder.strip():
        rules = replace(rules, placeholder_name=placeholder.strip())

    if "type_rules" in data:
        raw_rules = data.get("type_rules")
        if not isinstance(raw_rules, list):
            raise ValueError("type_rules must be a list")
        rules = replace(rules, type_rules=tuple(_parse_type_rule(r, i) for i, r in enumerate(raw_rules)))

    if "risk_rules" in data:
        raw_rules = data.get("risk_rules")
        if not isinstance(raw_rules, list):
            raise ValueError("risk_rules must be a list")
        rules = replace(rules, risk_rules=tuple(_parse_risk_rule(r, i) for i, r in enumerate(raw_rules)))

    thresholds = _ensure_dict(data.get("thresholds"))
    rules = replace(rules, risk_rules=_apply_thresholds(rules.risk_rules, thresholds))
    return rules


def load_rules(rules_path: Optional[str]) -> NormalizationRules:
    """
    Load rules from *rules_path*; ``None`` or empty returns the defaults.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file content is malformed
    """
    if not rules_path:
        return DEFAULT_RULES
    path = Path(rules_path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"rules file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"rules file is not valid YAML: {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"rules file must contain a mapping: {path}")
    rules = rules_from_dict(raw)
    logger.info(
        "Loaded rules from %s (%d sentinels, %d type rules, %d risk rules)",
        path, len(rules.sentinels), len(rules.type_rules), len(rules.risk_rules),
    )
    return rules
