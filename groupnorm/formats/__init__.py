"""
Source layout handling.

Public API:
  - FormatGroup, FormatGroupName, FORMAT_GROUPS   (registry)
  - resolve_format_group, iter_sheet_assignments
  - FieldExtractorSet                              (per-layout accessors)
  - FieldBag, extract_fields                       (cleaned intermediate fields)
"""

from groupnorm.formats.extractors import FieldExtractorSet
from groupnorm.formats.field_extractor import FieldBag, extract_fields
from groupnorm.formats.registry import (
    FORMAT_GROUPS,
    FormatGroup,
    FormatGroupName,
    iter_sheet_assignments,
    match_sheet_name,
    resolve_format_group,
)

__all__ = [
    "FORMAT_GROUPS",
    "FieldBag",
    "FieldExtractorSet",
    "FormatGroup",
    "FormatGroupName",
    "extract_fields",
    "iter_sheet_assignments",
    "match_sheet_name",
    "resolve_format_group",
]
