"""
EntityBuilder: one source row -> one ``CanonicalEntity``.

``build`` returns ``None`` for rows that must be skipped (no usable name).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from groupnorm.classifier import determine_risk_level, determine_type
from groupnorm.cleaning import ValueCleaner
from groupnorm.formats.extractors import FieldExtractorSet
from groupnorm.formats.field_extractor import FieldBag, extract_fields
from groupnorm.models import (
    UNKNOWN_PLATFORM,
    CanonicalEntity,
    ContactInfo,
    GroupStatus,
    RiskLevel,
)
from groupnorm.rules import DEFAULT_RULES, NormalizationRules

_WHITESPACE_RE = re.compile(r"\s+")


def sheet_slug(sheet_name: str) -> str:
    """Lower-case sheet name with every whitespace run replaced by ``_``."""
    return _WHITESPACE_RE.sub("_", sheet_name.lower())


def make_entity_id(sheet_name: str, serial: Optional[str], row_index: int) -> str:
    return f"{sheet_slug(sheet_name)}_{serial or row_index}"


def describe(name: str, members: int) -> str:
    return f"{name} - {members:,} members"


class EntityBuilder:
    """Holds the rules and run timestamp shared by every row of a run."""

    def __init__(
        self,
        rules: NormalizationRules = DEFAULT_RULES,
        run_time: Optional[datetime] = None,
        cleaner: Optional[ValueCleaner] = None,
    ):
        self._rules = rules
        self._cleaner = cleaner or ValueCleaner(rules)
        self._run_time = run_time or datetime.now(timezone.utc)

    @property
    def run_time(self) -> datetime:
        return self._run_time

    def is_placeholder(self, name: Optional[str]) -> bool:
        if not name or not name.strip():
            return True
        return name.strip().casefold() == self._rules.placeholder_name.casefold()

    def _social_media(self, fields: FieldBag) -> Dict[str, str]:
        urls = fields.social_urls()
        return {
            platform: urls[platform]
            for platform in self._rules.platform_order
            if urls.get(platform)
        }

    @staticmethod
    def _contact_info(fields: FieldBag) -> Optional[ContactInfo]:
        info = ContactInfo(phone=fields.phone, email=fields.email, website=fields.website)
        return None if info.is_empty() else info

    def build(
        self,
        row: Mapping[str, Any],
        sheet_name: str,
        row_index: int,
        extractors: FieldExtractorSet,
    ) -> Optional[CanonicalEntity]:
        fields = extract_fields(row, sheet_name, row_index, extractors, self._cleaner)
        if self.is_placeholder(fields.name):
            return None
        name = fields.name

        social_media = self._social_media(fields)
        platforms: List[str] = list(social_media.keys())
        risk_level = determine_risk_level(sheet_name, name, fields.members, self._rules)

        return CanonicalEntity(
            id=make_entity_id(sheet_name, fields.serial, row_index),
            name=name,
            type=determine_type(sheet_name, name, self._rules),
            members=fields.members,
            platforms=platforms,
            primary_platform=platforms[0] if platforms else UNKNOWN_PLATFORM,
            social_media=social_media,
            location=fields.address,
            contact_info=self._contact_info(fields),
            influencers=fields.influencers,
            description=describe(name, fields.members),
            risk_level=risk_level,
            category=sheet_name,
            sheet=sheet_name,
            status=GroupStatus.ACTIVE,
            monitoring_enabled=risk_level == RiskLevel.HIGH,
            created_at=self._run_time,
            updated_at=self._run_time,
        )
