"""
Per-layout field accessors.

A ``FieldExtractorSet`` bundles one accessor per canonical field. Every
accessor has the signature ``(row, sheet_name, row_index) -> raw value``
and returns ``None`` when its layout has no such column. Values are raw
here; cleaning happens in ``groupnorm.formats.field_extractor``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional, Tuple

from groupnorm.cleaning import cell_to_str

Row = Mapping[str, Any]
RowAccessor = Callable[[Row, str, int], Any]


def header_key(text: Any) -> str:
    """Compact header form: whitespace collapsed, lower-case."""
    return " ".join(str(text).split()).lower()


def lookup_column(row: Row, name: str) -> Any:
    """Exact header match first, then a whitespace/case-insensitive match."""
    if name in row:
        return row[name]
    wanted = header_key(name)
    for key, value in row.items():
        if header_key(key) == wanted:
            return value
    return None


@dataclass(frozen=True)
class Column:
    """Reads the first non-blank value among *names*, in order."""

    names: Tuple[str, ...]

    def __init__(self, *names: str):
        object.__setattr__(self, "names", tuple(names))

    def __call__(self, row: Row, sheet_name: str, row_index: int) -> Any:
        for name in self.names:
            value = lookup_column(row, name)
            if cell_to_str(value) != "":
                return value
        return None


@dataclass(frozen=True)
class Absent:
    """The layout has no column for this field."""

    names: Tuple[str, ...] = ()

    def __call__(self, row: Row, sheet_name: str, row_index: int) -> Any:
        return None


ABSENT = Absent()


@dataclass(frozen=True)
class FieldExtractorSet:
    serial: RowAccessor
    name: RowAccessor
    members: RowAccessor
    influencers: RowAccessor
    facebook: RowAccessor
    twitter: RowAccessor
    instagram: RowAccessor
    youtube: RowAccessor
    address: RowAccessor
    phone: RowAccessor
    email: RowAccessor
    website: RowAccessor = ABSENT
    # layout-specific column with no canonical slot
    extras: RowAccessor = ABSENT

    def expected_columns(self) -> Tuple[Tuple[str, ...], ...]:
        """
        Column alternatives read by the accessors, in field order. Each
        entry is satisfied when any one of its names is present.
        """
        out = []
        for f in fields(self):
            names = tuple(getattr(getattr(self, f.name), "names", ()))
            if names and names not in out:
                out.append(names)
        return tuple(out)


# ---------------------------------------------------------------------------
# Layouts observed in the source workbook
# ---------------------------------------------------------------------------

STANDARD = FieldExtractorSet(
    serial=Column("Sl No"),
    name=Column("Organisation Type"),
    members=Column("Total Members"),
    influencers=Column("Top Influencer IDS"),
    facebook=Column("Facebook Profile URL"),
    twitter=Column("Twitter"),
    instagram=Column("Instagram"),
    youtube=Column("Youtube ID", "Youtube"),
    address=Column("Physical Address"),
    phone=Column("Linked Phone Number"),
    email=Column("Linked E-Mail ID"),
)

# Same as STANDARD without any YouTube column.
MUSLIM_GROUPS = FieldExtractorSet(
    serial=Column("Sl No"),
    name=Column("Organisation Type"),
    members=Column("Total Members"),
    influencers=Column("Top Influencer IDS"),
    facebook=Column("Facebook Profile URL"),
    twitter=Column("Twitter"),
    instagram=Column("Instagram"),
    youtube=ABSENT,
    address=Column("Physical Address"),
    phone=Column("Linked Phone Number"),
    email=Column("Linked E-Mail ID"),
)

# YouTube stored under "Youtube" rather than "Youtube ID".
HUMAN_RIGHTS = FieldExtractorSet(
    serial=Column("Sl No"),
    name=Column("Organisation Type"),
    members=Column("Total Members"),
    influencers=Column("Top Influencer IDS"),
    facebook=Column("Facebook Profile URL"),
    twitter=Column("Twitter"),
    instagram=Column("Instagram"),
    youtube=Column("Youtube"),
    address=Column("Physical Address"),
    phone=Column("Linked Phone Number"),
    email=Column("Linked E-Mail ID"),
)

# Page-oriented layout; the misspelled headers are the real ones.
MIXED = FieldExtractorSet(
    serial=Column("SL No"),
    name=Column("Facebook Page Name", "ORG"),
    members=ABSENT,
    influencers=ABSENT,
    facebook=Column("Facebook Page Link"),
    twitter=Column("Twitter Link", "Twitter Usernmae"),
    instagram=ABSENT,
    youtube=ABSENT,
    address=Column("Location", "Address"),
    phone=Column("Mobile Nomber"),
    email=Column("Email ID"),
    website=Column("Website"),
    extras=Column("JOB"),
)

# One name column and a Twitter handle; rows carry no serial number.
MIXED_MINIMAL = FieldExtractorSet(
    serial=ABSENT,
    name=Column("POLITICAL AND RELEGIOUS  ORGANIZATIONS KARNATAKA"),
    members=ABSENT,
    influencers=ABSENT,
    facebook=ABSENT,
    twitter=Column("IN TWITTER"),
    instagram=ABSENT,
    youtube=ABSENT,
    address=ABSENT,
    phone=ABSENT,
    email=ABSENT,
)
