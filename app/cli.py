import argparse
import sys
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from app.backend.process import analyze_workbook, preview_workbook
from groupnorm.config import get_settings
from groupnorm.errors import WorkbookReadError
from groupnorm.logger import set_level
from groupnorm.pipeline import format_summary


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Normalize group sheets into canonical entities (dry run, no database writes)."
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["preview", "analyze"],
        default="preview",
        help="preview: normalize and report (default); analyze: survey sheet columns.",
    )
    parser.add_argument(
        "--workbook",
        default=None,
        help="Source workbook (.xlsx/.xls). Default: GROUPS_WORKBOOK_PATH.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output JSON path. Default for preview: PREVIEW_OUTPUT_PATH.",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Number of entities kept in sampleGroups. Default: PREVIEW_SAMPLE_SIZE.",
    )
    parser.add_argument(
        "--rules",
        default=None,
        help="YAML file extending the cleaning lexicon and classification rules.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    set_level("DEBUG" if args.verbose else get_settings().LOG_LEVEL)
    if args.sample_size is not None and args.sample_size < 0:
        print("[error] --sample-size must be >= 0")
        return 2

    try:
        if args.command == "analyze":
            analysis, json_path = analyze_workbook(args.workbook, args.output)
            for sheet_name, info in analysis["sheets"].items():
                missing = info["missingColumns"]
                print(f"{sheet_name}: {info['rowCount']} rows, format={info['formatGroup']}"
                      + (f", missing={missing}" if missing else ""))
            if json_path:
                print("JSON:", json_path)
            return 0

        report, json_path = preview_workbook(
            workbook_path=args.workbook,
            output_path=args.output,
            sample_size=args.sample_size,
            rules_path=args.rules,
        )
    except (WorkbookReadError, FileNotFoundError, ValueError) as exc:
        print(f"[error] {exc}")
        return 1

    print(format_summary(report.summary))
    print("JSON:", json_path)
    print("NO DATABASE CHANGES WERE MADE - THIS WAS JUST A PREVIEW")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
