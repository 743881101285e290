"""
Backend process module
======================

Wraps the normalization pipeline for the command line: resolves settings,
opens the workbook, runs the dry-run preview or the column survey and
writes the JSON artifact.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from groupnorm.analysis import analyze_columns
from groupnorm.config import get_settings
from groupnorm.logger import get_logger
from groupnorm.models import PreviewReport
from groupnorm.pipeline import run_preview, write_preview_report
from groupnorm.reader import open_workbook
from groupnorm.rules_loader import load_rules

logger = get_logger(__name__)


def preview_workbook(
    workbook_path: Optional[str] = None,
    output_path: Optional[str] = None,
    sample_size: Optional[int] = None,
    rules_path: Optional[str] = None,
) -> Tuple[PreviewReport, str]:
    """
    Run the dry-run preview and write the report.

    Unset arguments fall back to ``Settings``. Raises ``WorkbookReadError``
    before anything is written when the workbook cannot be read.
    """
    settings = get_settings()
    workbook_path = workbook_path or settings.GROUPS_WORKBOOK_PATH
    output_path = output_path or settings.PREVIEW_OUTPUT_PATH
    if sample_size is None:
        sample_size = settings.PREVIEW_SAMPLE_SIZE
    rules = load_rules(rules_path or settings.GROUPS_RULES_PATH)

    logger.info("Previewing %s", workbook_path)
    source = open_workbook(workbook_path)
    report = run_preview(source, rules=rules, sample_size=sample_size)
    json_path = write_preview_report(report, output_path)
    return report, json_path


def analyze_workbook(
    workbook_path: Optional[str] = None,
    output_path: Optional[str] = None,
) -> Tuple[Dict[str, Any], Optional[str]]:
    """Survey sheet columns; the JSON file is written only when *output_path* is given."""
    settings = get_settings()
    workbook_path = workbook_path or settings.GROUPS_WORKBOOK_PATH
    source = open_workbook(workbook_path)
    analysis = analyze_columns(source)
    if not output_path:
        return analysis, None
    return analysis, write_json_output(analysis, output_path)


def write_json_output(result: Dict[str, Any], output_path: str) -> str:
    path = Path(output_path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result, f, ensure_ascii=False, indent=2, default=str)
    return str(path)
