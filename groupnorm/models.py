"""
Canonical data model
====================

``CanonicalEntity`` is the single record shape every source row is
normalized into; ``PreviewReport`` is the read-only artifact of a run.
Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class GroupType(str, Enum):
    RELIGIOUS = "religious"
    POLITICAL = "political"
    SOCIAL = "social"
    PROFESSIONAL = "professional"
    CULTURAL = "cultural"
    OTHER = "other"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GroupStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MONITORED = "monitored"


UNKNOWN_PLATFORM = "unknown"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )


class ContactInfo(_WireModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None

    def is_empty(self) -> bool:
        return self.phone is None and self.email is None and self.website is None


class CanonicalEntity(_WireModel):
    """
    One normalized group.

    Invariants checked on construction:
      - ``name`` is non-empty
      - ``platforms`` lists exactly the keys of ``social_media``, in order
      - ``primary_platform`` is the first platform, or ``"unknown"``
      - a high risk level implies ``monitoring_enabled``
    """
    id: str
    name: str
    type: GroupType
    members: int = Field(default=0, ge=0)
    platforms: List[str] = Field(default_factory=list)
    primary_platform: str = UNKNOWN_PLATFORM
    social_media: Dict[str, str] = Field(default_factory=dict)
    location: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    influencers: Optional[str] = None
    description: str
    risk_level: RiskLevel
    category: str
    sheet: str
    status: GroupStatus = GroupStatus.ACTIVE
    monitoring_enabled: bool = False
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def _check_invariants(self) -> "CanonicalEntity":
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.name or not self.name.strip():
            raise ValueError("name must not be empty")
        if self.platforms != list(self.social_media.keys()):
            raise ValueError(
                f"platforms {self.platforms} do not match socialMedia keys {list(self.social_media)}"
            )
        expected_primary = self.platforms[0] if self.platforms else UNKNOWN_PLATFORM
        if self.primary_platform != expected_primary:
            raise ValueError(f"primaryPlatform must be {expected_primary!r}")
        if self.risk_level == RiskLevel.HIGH.value and not self.monitoring_enabled:
            raise ValueError("high risk groups must have monitoring enabled")
        return self

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys; absent contact sub-fields are omitted."""
        record = self.model_dump(by_alias=True, mode="json")
        if self.contact_info is not None:
            record["contactInfo"] = self.contact_info.model_dump(mode="json", exclude_none=True)
        return record


class PreviewSummary(_WireModel):
    total_sheets: int = 0
    total_groups: int = 0
    by_sheet: Dict[str, int] = Field(default_factory=dict)
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_risk_level: Dict[str, int] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
    skipped_rows: Dict[str, int] = Field(default_factory=dict)
    unregistered_sheets: List[str] = Field(default_factory=list)


class PreviewReport(_WireModel):
    """Dry-run artifact: summary plus a bounded sample of produced entities."""
    summary: PreviewSummary
    sample_groups: List[CanonicalEntity] = Field(default_factory=list)
    total_groups: int = 0

    def to_record(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.model_dump(by_alias=True, mode="json"),
            "sampleGroups": [g.to_record() for g in self.sample_groups],
            "totalGroups": self.total_groups,
        }
