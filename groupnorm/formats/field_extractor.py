"""Apply a layout's accessors to one row and clean every value."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from groupnorm.cleaning import ValueCleaner
from groupnorm.formats.extractors import FieldExtractorSet

_SEPARATORS_RE = re.compile(r"[,\s_']")
_LEADING_DIGITS_RE = re.compile(r"^\d+")


def parse_members(text: Optional[str]) -> int:
    """
    Member count from cleaned text: thousands separators are ignored and the
    leading digit run is used ("12,400 approx" -> 12400). Anything else is 0.
    """
    if not text:
        return 0
    m = _LEADING_DIGITS_RE.match(_SEPARATORS_RE.sub("", text))
    if not m:
        return 0
    return int(m.group(0))


@dataclass(frozen=True)
class FieldBag:
    """Cleaned, loosely-typed fields of one row; ``None`` means absent."""

    serial: Optional[str]
    name: Optional[str]
    members: int
    influencers: Optional[str]
    facebook: Optional[str]
    twitter: Optional[str]
    instagram: Optional[str]
    youtube: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    website: Optional[str]
    extras: Optional[str] = None

    def social_urls(self) -> Mapping[str, Optional[str]]:
        return {
            "facebook": self.facebook,
            "twitter": self.twitter,
            "instagram": self.instagram,
            "youtube": self.youtube,
        }


def extract_fields(
    row: Mapping[str, Any],
    sheet_name: str,
    row_index: int,
    extractors: FieldExtractorSet,
    cleaner: ValueCleaner,
) -> FieldBag:
    def get(accessor) -> Optional[str]:
        return cleaner.clean(accessor(row, sheet_name, row_index))

    return FieldBag(
        serial=get(extractors.serial),
        name=get(extractors.name),
        members=parse_members(get(extractors.members)),
        influencers=get(extractors.influencers),
        facebook=get(extractors.facebook),
        twitter=get(extractors.twitter),
        instagram=get(extractors.instagram),
        youtube=get(extractors.youtube),
        address=get(extractors.address),
        phone=get(extractors.phone),
        email=get(extractors.email),
        website=get(extractors.website),
        extras=get(extractors.extras),
    )
