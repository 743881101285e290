import textwrap

import pytest

from groupnorm.classifier import determine_risk_level, determine_type
from groupnorm.cleaning import ValueCleaner
from groupnorm.rules import DEFAULT_RULES
from groupnorm.rules_loader import load_rules, rules_from_dict


def _write(tmp_path, text):
    path = tmp_path / "rules.yaml"
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


def test_no_path_returns_defaults():
    assert load_rules(None) is DEFAULT_RULES
    assert load_rules("") is DEFAULT_RULES


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(str(tmp_path / "missing.yaml"))


def test_sentinels_and_prefixes_extend_defaults(tmp_path):
    rules = load_rules(_write(tmp_path, """
        sentinels: ["Not Mentioned", "nil"]
        label_prefixes: ["Email ID"]
    """))
    assert "not mentioned" in rules.sentinels
    assert rules.sentinels.count("nil") == 1
    assert rules.label_prefixes == ("Linked E-Mail ID", "Email ID")

    cleaner = ValueCleaner(rules)
    assert cleaner.clean("NOT MENTIONED") is None
    assert cleaner.clean("n/a") is None
    assert cleaner.clean("Email ID a@b.c") == "a@b.c"


def test_thresholds_override_rule_by_label(tmp_path):
    rules = load_rules(_write(tmp_path, """
        thresholds:
          large_membership: 80000
    """))
    assert determine_risk_level("Trade Unions", "Workers Federation", 75000, rules) == "low"
    assert determine_risk_level("Trade Unions", "Workers Federation", 80001, rules) == "medium"
    # untouched rules keep their defaults
    assert determine_risk_level("Right Hindu Groups", "Hindu Parishad", 10001, rules) == "medium"


def test_rule_tables_replace_defaults(tmp_path):
    rules = load_rules(_write(tmp_path, """
        type_rules:
          - {scope: name, keywords: [chess], result: cultural}
        risk_rules:
          - {label: watched, result: high, sheet_keywords: [rrp]}
    """))
    assert determine_type("RRP", "Chess Circle", rules) == "cultural"
    assert determine_type("Right Hindu Groups", "x", rules) == "other"
    assert determine_risk_level("RRP", "anything", 0, rules) == "high"
    assert determine_risk_level("Mixed", "Bajrang Dal", 0, rules) == "low"


@pytest.mark.parametrize(
    "data,message",
    [
        ({"type_rules": [{"scope": "row", "keywords": ["x"], "result": "social"}]}, "scope"),
        ({"type_rules": [{"scope": "name", "keywords": [], "result": "social"}]}, "keywords"),
        ({"type_rules": [{"scope": "name", "keywords": ["x"], "result": "sporty"}]}, "unknown result"),
        ({"risk_rules": [{"label": "r", "result": "extreme", "members_over": 1}]}, "unknown result"),
        ({"risk_rules": [{"label": "r", "result": "high"}]}, "no condition"),
        ({"risk_rules": [{"label": "r", "result": "high", "members_over": "many"}]}, "integer"),
        ({"risk_rules": "high"}, "must be a list"),
        ({"thresholds": {"large_membership": "lots"}}, "integer"),
    ],
)
def test_malformed_rules_raise(data, message):
    with pytest.raises(ValueError, match=message):
        rules_from_dict(data)


def test_non_mapping_file_raises(tmp_path):
    with pytest.raises(ValueError):
        load_rules(_write(tmp_path, "- just\n- a list\n"))


def test_invalid_yaml_raises_value_error(tmp_path):
    path = _write(tmp_path, "sentinels: [unclosed\n")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_rules(path)
