"""
Pipeline: dry-run orchestration over every registered sheet.

run_preview          – workbook source -> PreviewReport (no store is touched)
write_preview_report – PreviewReport -> JSON file

Per-sheet work is delegated to ``groupnorm.sheet_processor``; this module
only walks the registry, aggregates counts and keeps ids unique.
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from groupnorm.entity_builder import EntityBuilder
from groupnorm.formats.registry import (
    FORMAT_GROUPS,
    FormatGroup,
    iter_sheet_assignments,
    match_sheet_name,
    resolve_format_group,
)
from groupnorm.logger import get_logger
from groupnorm.models import CanonicalEntity, PreviewReport, PreviewSummary
from groupnorm.reader import WorkbookSource
from groupnorm.rules import DEFAULT_RULES, NormalizationRules
from groupnorm.sheet_processor import SheetResult, process_sheet

logger = get_logger(__name__)

DEFAULT_SAMPLE_SIZE = 10


def _unique_id(entity: CanonicalEntity, seen: Set[str]) -> CanonicalEntity:
    if entity.id not in seen:
        seen.add(entity.id)
        return entity
    suffix = 2
    while f"{entity.id}-{suffix}" in seen:
        suffix += 1
    new_id = f"{entity.id}-{suffix}"
    logger.warning("Duplicate id %s in sheet %s, renamed to %s", entity.id, entity.sheet, new_id)
    seen.add(new_id)
    return entity.model_copy(update={"id": new_id})


def collect_entities(
    source: WorkbookSource,
    rules: NormalizationRules = DEFAULT_RULES,
    groups: Tuple[FormatGroup, ...] = FORMAT_GROUPS,
    run_time: Optional[datetime] = None,
) -> Tuple[List[CanonicalEntity], List[SheetResult], List[str]]:
    """
    Process every declared sheet present in *source*.

    Returns ``(entities, sheet_results, errors)`` where *errors* holds one
    message per declared sheet missing from the workbook.
    """
    builder = EntityBuilder(rules=rules, run_time=run_time)
    available = source.sheet_names()
    entities: List[CanonicalEntity] = []
    results: List[SheetResult] = []
    errors: List[str] = []
    seen_ids: Set[str] = set()

    for group, declared in iter_sheet_assignments(groups):
        actual = match_sheet_name(declared, available)
        if actual is None:
            logger.warning("Sheet %r not found in workbook", declared)
            errors.append(f'Sheet "{declared}" not found')
            continue
        logger.info("Processing sheet %s (format %s)", actual, group.name.value)
        result = process_sheet(source.read_rows(actual), actual, group.extractors, builder)
        result.entities = [_unique_id(e, seen_ids) for e in result.entities]
        results.append(result)
        entities.extend(result.entities)

    return entities, results, errors


def summarize(
    entities: List[CanonicalEntity],
    results: List[SheetResult],
    errors: List[str],
    unregistered: Optional[List[str]] = None,
) -> PreviewSummary:
    return PreviewSummary(
        total_sheets=len(results),
        total_groups=len(entities),
        by_sheet={r.sheet_name: len(r.entities) for r in results},
        by_type=dict(Counter(e.type for e in entities)),
        by_risk_level=dict(Counter(e.risk_level for e in entities)),
        errors=list(errors),
        skipped_rows={r.sheet_name: r.skipped_count for r in results},
        unregistered_sheets=list(unregistered or []),
    )


def run_preview(
    source: WorkbookSource,
    rules: NormalizationRules = DEFAULT_RULES,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    groups: Tuple[FormatGroup, ...] = FORMAT_GROUPS,
    run_time: Optional[datetime] = None,
) -> PreviewReport:
    """Normalize every registered sheet and report, without writing anywhere."""
    if sample_size < 0:
        raise ValueError("sample_size must be >= 0")
    entities, results, errors = collect_entities(source, rules, groups, run_time)
    unregistered = [s for s in source.sheet_names() if resolve_format_group(s, groups) is None]
    if unregistered:
        logger.info("Sheets without a format group: %s", unregistered)

    summary = summarize(entities, results, errors, unregistered)
    logger.info(
        "Preview complete: %d sheets, %d groups, %d errors",
        summary.total_sheets, summary.total_groups, len(summary.errors),
    )
    return PreviewReport(
        summary=summary,
        sample_groups=entities[:sample_size],
        total_groups=len(entities),
    )


def write_preview_report(report: PreviewReport, output_path: str) -> str:
    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_record(), f, ensure_ascii=False, indent=2, default=str)
    logger.info("Preview data saved to %s", path)
    return str(path)


def format_summary(summary: PreviewSummary) -> str:
    """Human-readable block for console output."""
    lines: List[str] = [
        f"Total Sheets Processed: {summary.total_sheets}",
        f"Total Groups to Import: {summary.total_groups}",
    ]

    def section(title: str, counts: Dict[str, int]) -> None:
        lines.append("")
        lines.append(title)
        for key, count in counts.items():
            lines.append(f"  {key}: {count}")

    section("Groups by Sheet:", summary.by_sheet)
    section("Groups by Type:", summary.by_type)
    section("Groups by Risk Level:", summary.by_risk_level)
    if summary.errors:
        lines.append("")
        lines.append("Errors:")
        lines.extend(f"  - {err}" for err in summary.errors)
    return "\n".join(lines)
