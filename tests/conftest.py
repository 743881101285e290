"""
Pytest configuration and shared fixtures.
"""
import os
import sys
from datetime import datetime, timezone

import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

STANDARD_HEADERS = [
    "Sl No",
    "Organisation Type",
    "Total Members",
    "Top Influencer IDS",
    "Facebook Profile URL",
    "Twitter",
    "Instagram",
    "Youtube ID",
    "Physical Address",
    "Linked Phone Number",
    "Linked E-Mail ID",
]


@pytest.fixture
def run_time():
    return datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def standard_row():
    """A fully populated row in the standard layout."""
    return {
        "Sl No": 1,
        "Organisation Type": "Hindu Jagruti Sena",
        "Total Members": "3543",
        "Top Influencer IDS": "@leader_one",
        "Facebook Profile URL": "https://facebook.com/hjs",
        "Twitter": "nil",
        "Instagram": "",
        "Youtube ID": "N/A",
        "Physical Address": "  Mangaluru  ",
        "Linked Phone Number": "9876543210",
        "Linked E-Mail ID": "Linked E-Mail ID hjs@example.org",
    }


@pytest.fixture
def make_workbook(tmp_path):
    """Write ``{sheet_name: [header, row, ...]}`` to an .xlsx and return its path."""
    from openpyxl import Workbook

    def _make(sheets, filename="groups.xlsx"):
        wb = Workbook()
        wb.remove(wb.active)
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(sheet_name)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / filename
        wb.save(path)
        return str(path)

    return _make
