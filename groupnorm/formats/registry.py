"""
Format-group registry.

Maps every known source sheet to the layout (``FieldExtractorSet``) its
columns follow. This is the only place that knows sheet names; the rest
of the pipeline receives an extractor set and never branches on a sheet.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from groupnorm.formats import extractors
from groupnorm.formats.extractors import FieldExtractorSet


class FormatGroupName(str, Enum):
    STANDARD = "standard"
    MUSLIM_GROUPS = "muslim_groups"
    HUMAN_RIGHTS = "human_rights"
    MIXED = "mixed"
    MIXED_MINIMAL = "mixed_minimal"


@dataclass(frozen=True)
class FormatGroup:
    name: FormatGroupName
    sheet_names: Tuple[str, ...]
    extractors: FieldExtractorSet


# Sheet names are verbatim, including the trailing space in "Kannadda ".
FORMAT_GROUPS: Tuple[FormatGroup, ...] = (
    FormatGroup(
        name=FormatGroupName.STANDARD,
        sheet_names=(
            "Right Hindu Groups",
            "Right Hindu Persons",
            "Trade Unions",
            "RRP",
            "Students ORG",
            "Christians Activist",
            "Kannadda ",
            "Woman",
            "Political",
        ),
        extractors=extractors.STANDARD,
    ),
    FormatGroup(
        name=FormatGroupName.MUSLIM_GROUPS,
        sheet_names=("Right Wing Muslim Groups",),
        extractors=extractors.MUSLIM_GROUPS,
    ),
    FormatGroup(
        name=FormatGroupName.HUMAN_RIGHTS,
        sheet_names=("Human Rights", "ALL Farmers ORG Karnataka"),
        extractors=extractors.HUMAN_RIGHTS,
    ),
    FormatGroup(
        name=FormatGroupName.MIXED,
        sheet_names=("Mixed",),
        extractors=extractors.MIXED,
    ),
    FormatGroup(
        name=FormatGroupName.MIXED_MINIMAL,
        sheet_names=("Mixed 2",),
        extractors=extractors.MIXED_MINIMAL,
    ),
)


def _sheet_key(sheet_name: str) -> str:
    return " ".join(sheet_name.split()).casefold()


def validate_registry(groups: Iterable[FormatGroup]) -> None:
    """
    Reject a registry that misses a format group, declares one twice, or
    claims the same sheet from two groups.
    """
    groups = list(groups)
    names = [g.name for g in groups]
    missing = set(FormatGroupName) - set(names)
    if missing:
        raise ValueError(f"format groups without a registry entry: {sorted(m.value for m in missing)}")
    if len(names) != len(set(names)):
        raise ValueError("format group declared more than once")
    owner: Dict[str, FormatGroupName] = {}
    for group in groups:
        for sheet in group.sheet_names:
            key = _sheet_key(sheet)
            if key in owner:
                raise ValueError(
                    f"sheet {sheet!r} claimed by both {owner[key].value} and {group.name.value}"
                )
            owner[key] = group.name


validate_registry(FORMAT_GROUPS)


def resolve_format_group(
    sheet_name: str,
    groups: Tuple[FormatGroup, ...] = FORMAT_GROUPS,
) -> Optional[FormatGroup]:
    """Return the group declaring *sheet_name*, or ``None`` when none does."""
    exact = [g for g in groups if sheet_name in g.sheet_names]
    if exact:
        return exact[0]
    key = _sheet_key(sheet_name)
    for group in groups:
        if any(_sheet_key(s) == key for s in group.sheet_names):
            return group
    return None


def iter_sheet_assignments(
    groups: Tuple[FormatGroup, ...] = FORMAT_GROUPS,
) -> Iterator[Tuple[FormatGroup, str]]:
    """Yield ``(group, declared_sheet_name)`` pairs in registry order."""
    for group in groups:
        for sheet in group.sheet_names:
            yield group, sheet


def match_sheet_name(declared: str, available: List[str]) -> Optional[str]:
    """
    Find the workbook sheet for a declared name: exact first, then ignoring
    surrounding/duplicated whitespace and letter case.
    """
    if declared in available:
        return declared
    key = _sheet_key(declared)
    for name in available:
        if _sheet_key(name) == key:
            return name
    return None
