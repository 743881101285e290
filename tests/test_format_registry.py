import pytest

from groupnorm.formats import (
    FORMAT_GROUPS,
    FormatGroupName,
    iter_sheet_assignments,
    match_sheet_name,
    resolve_format_group,
)
from groupnorm.formats import extractors
from groupnorm.formats.registry import FormatGroup, validate_registry


def test_every_format_group_is_registered_once():
    names = [g.name for g in FORMAT_GROUPS]
    assert sorted(n.value for n in names) == sorted(n.value for n in FormatGroupName)


@pytest.mark.parametrize(
    "sheet_name,expected",
    [
        ("Right Hindu Groups", FormatGroupName.STANDARD),
        ("Kannadda ", FormatGroupName.STANDARD),
        ("Right Wing Muslim Groups", FormatGroupName.MUSLIM_GROUPS),
        ("ALL Farmers ORG Karnataka", FormatGroupName.HUMAN_RIGHTS),
        ("Mixed", FormatGroupName.MIXED),
        ("Mixed 2", FormatGroupName.MIXED_MINIMAL),
    ],
)
def test_resolve_format_group(sheet_name, expected):
    group = resolve_format_group(sheet_name)
    assert group is not None
    assert group.name == expected


def test_resolve_tolerates_whitespace_and_case():
    assert resolve_format_group("Kannadda").name == FormatGroupName.STANDARD
    assert resolve_format_group("  human   rights ").name == FormatGroupName.HUMAN_RIGHTS


def test_unknown_sheet_is_not_found():
    assert resolve_format_group("Sheet1") is None


def test_iter_sheet_assignments_follows_registry_order():
    pairs = list(iter_sheet_assignments())
    assert pairs[0][0].name == FormatGroupName.STANDARD
    assert pairs[0][1] == "Right Hindu Groups"
    assert pairs[-1][1] == "Mixed 2"
    assert len(pairs) == sum(len(g.sheet_names) for g in FORMAT_GROUPS)


def test_match_sheet_name_prefers_exact():
    assert match_sheet_name("Kannadda ", ["Kannadda ", "Woman"]) == "Kannadda "
    assert match_sheet_name("Kannadda ", ["Kannadda", "Woman"]) == "Kannadda"
    assert match_sheet_name("Political", ["Woman"]) is None


def test_validate_registry_rejects_sheet_claimed_twice():
    groups = list(FORMAT_GROUPS)
    groups[1] = FormatGroup(
        name=groups[1].name,
        sheet_names=groups[1].sheet_names + ("RRP",),
        extractors=groups[1].extractors,
    )
    with pytest.raises(ValueError, match="RRP"):
        validate_registry(groups)


def test_validate_registry_rejects_missing_group():
    with pytest.raises(ValueError, match="mixed_minimal"):
        validate_registry(FORMAT_GROUPS[:-1])


def test_layouts_differ_where_the_schema_differs():
    assert extractors.MUSLIM_GROUPS.youtube({"Youtube ID": "yt"}, "Right Wing Muslim Groups", 1) is None
    assert extractors.HUMAN_RIGHTS.youtube({"Youtube ID": "yt", "Youtube": "y2"}, "Human Rights", 1) == "y2"
    assert extractors.STANDARD.youtube({"Youtube": "y2"}, "RRP", 1) == "y2"
    assert extractors.STANDARD.website({"Website": "w"}, "RRP", 1) is None
    assert extractors.MIXED.website({"Website": "w"}, "Mixed", 1) == "w"
