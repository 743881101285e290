"""
Column survey of a workbook.

Lists every sheet's headers, groups sheets that share an identical header
layout, counts how many sheets use each column, and reports which columns
a registered layout expects but the sheet lacks. Used to keep the format
registry in step with new source files.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Dict, List, Tuple

from groupnorm.cleaning import cell_to_str
from groupnorm.formats.extractors import header_key
from groupnorm.formats.registry import FORMAT_GROUPS, FormatGroup, resolve_format_group
from groupnorm.logger import get_logger
from groupnorm.reader import WorkbookSource

logger = get_logger(__name__)


def _first_row_sample(headers: List[str], rows: List[Dict[str, Any]]) -> Dict[str, str]:
    if not rows:
        return {}
    first = rows[0]
    sample: Dict[str, str] = {}
    for h in headers:
        text = cell_to_str(first.get(h))
        if text:
            sample[h] = text if len(text) <= 50 else text[:50] + "..."
    return sample


def analyze_columns(
    source: WorkbookSource,
    groups: Tuple[FormatGroup, ...] = FORMAT_GROUPS,
) -> Dict[str, Any]:
    sheets: Dict[str, Any] = OrderedDict()
    layouts: Dict[Tuple[str, ...], List[str]] = OrderedDict()
    usage: Dict[str, List[str]] = OrderedDict()

    for sheet_name in source.sheet_names():
        headers = source.read_headers(sheet_name)
        rows = source.read_rows(sheet_name)
        group = resolve_format_group(sheet_name, groups)

        missing: List[str] = []
        if group is not None:
            present = {header_key(h) for h in headers}
            missing = [
                " / ".join(names)
                for names in group.extractors.expected_columns()
                if not any(header_key(n) in present for n in names)
            ]
            if missing:
                logger.warning("Sheet %s lacks expected columns %s", sheet_name, missing)

        sheets[sheet_name] = {
            "headers": headers,
            "rowCount": len(rows),
            "sample": _first_row_sample(headers, rows),
            "formatGroup": group.name.value if group is not None else None,
            "missingColumns": missing,
        }
        layouts.setdefault(tuple(headers), []).append(sheet_name)
        for h in headers:
            usage.setdefault(h, []).append(sheet_name)

    column_usage = OrderedDict(
        sorted(usage.items(), key=lambda item: len(item[1]), reverse=True)
    )
    return {
        "sheets": sheets,
        "columnGroups": [{"columns": list(cols), "sheets": names} for cols, names in layouts.items()],
        "uniqueColumns": list(usage.keys()),
        "columnUsage": column_usage,
    }
