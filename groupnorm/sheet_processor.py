"""
SheetProcessor: turn every row of one sheet into entities.

Rows are handled one at a time in source order. A row ends either as an
emitted entity or as skipped (blank, no usable name, or an exception
while building it); no row failure stops the sheet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from groupnorm.cleaning import cell_to_str
from groupnorm.entity_builder import EntityBuilder
from groupnorm.formats.extractors import FieldExtractorSet
from groupnorm.logger import get_logger
from groupnorm.models import CanonicalEntity

logger = get_logger(__name__)


@dataclass
class SheetResult:
    sheet_name: str
    entities: List[CanonicalEntity] = field(default_factory=list)
    skipped_count: int = 0
    total_rows: int = 0
    row_errors: List[str] = field(default_factory=list)


def is_blank_row(row: Optional[Mapping[str, Any]]) -> bool:
    if not row:
        return True
    return all(cell_to_str(v) == "" for v in row.values())


def process_sheet(
    rows: Iterable[Optional[Mapping[str, Any]]],
    sheet_name: str,
    extractors: FieldExtractorSet,
    builder: Optional[EntityBuilder] = None,
) -> SheetResult:
    """
    Build entities for *rows*; ``row_index`` is 1-based over data rows and
    is the id fallback for rows without a serial number.
    """
    builder = builder or EntityBuilder()
    result = SheetResult(sheet_name=sheet_name)

    for index, row in enumerate(rows, start=1):
        result.total_rows += 1
        if is_blank_row(row):
            result.skipped_count += 1
            continue
        try:
            entity = builder.build(row, sheet_name, index, extractors)
        except Exception as exc:
            logger.error("Error processing row %d in %s: %s", index, sheet_name, exc, exc_info=True)
            result.row_errors.append(f"{sheet_name} row {index}: {exc}")
            result.skipped_count += 1
            continue
        if entity is None:
            result.skipped_count += 1
            continue
        result.entities.append(entity)

    logger.info(
        "Sheet %s: %d groups, %d skipped of %d rows",
        sheet_name, len(result.entities), result.skipped_count, result.total_rows,
    )
    return result
