"""
Workbook sources: the only place that touches input files.

``ExcelWorkbookSource`` reads ``.xlsx``/``.xlsm`` via openpyxl and ``.xls``
via xlrd, both through pandas. ``InMemoryWorkbookSource`` serves the same
interface from plain dicts. Any failure to open or read the workbook is
raised as ``WorkbookReadError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import pandas as pd
from openpyxl import load_workbook

from groupnorm.errors import WorkbookReadError
from groupnorm.logger import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".xls")


class WorkbookSource(Protocol):
    def sheet_names(self) -> List[str]:
        ...

    def read_headers(self, sheet_name: str) -> List[str]:
        ...

    def read_rows(self, sheet_name: str) -> List[Row]:
        ...


class ExcelWorkbookSource:
    """
    First row of each sheet is the header. Cells are read as objects with
    pandas NA inference disabled, so strings like "NA" or "null" reach the
    value cleaner untouched.
    """

    def __init__(self, file_path: str):
        self.file_path = str(file_path)
        self._suffix = Path(self.file_path).suffix.lower()
        self._sheet_names: Optional[List[str]] = None
        self._frames: Dict[str, pd.DataFrame] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def sheet_names(self) -> List[str]:
        if self._sheet_names is None:
            self._check_file()
            try:
                self._sheet_names = self._list_sheet_names()
            except Exception as exc:
                raise WorkbookReadError(self.file_path, str(exc)) from exc
            logger.info("Opened %s (%d sheets)", self.file_path, len(self._sheet_names))
        return list(self._sheet_names)

    def read_headers(self, sheet_name: str) -> List[str]:
        return [str(c) for c in self._frame(sheet_name).columns]

    def read_rows(self, sheet_name: str) -> List[Row]:
        df = self._frame(sheet_name)
        return [
            {str(k): v for k, v in record.items()}
            for record in df.to_dict(orient="records")
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_file(self) -> None:
        path = Path(self.file_path)
        if not path.is_file():
            raise WorkbookReadError(self.file_path, "file not found")
        if self._suffix not in SUPPORTED_SUFFIXES:
            raise WorkbookReadError(self.file_path, f"unsupported file type {self._suffix or '(none)'}")

    def _engine(self) -> str:
        return "xlrd" if self._suffix == ".xls" else "openpyxl"

    def _list_sheet_names(self) -> List[str]:
        if self._suffix == ".xls":
            import xlrd
            wb = xlrd.open_workbook(self.file_path)
            return list(wb.sheet_names())
        wb = load_workbook(self.file_path, read_only=True, data_only=True)
        try:
            return list(wb.sheetnames or [])
        finally:
            wb.close()

    def _frame(self, sheet_name: str) -> pd.DataFrame:
        if sheet_name not in self._frames:
            if sheet_name not in self.sheet_names():
                raise KeyError(sheet_name)
            try:
                df = pd.read_excel(
                    self.file_path,
                    sheet_name=sheet_name,
                    header=0,
                    dtype=object,
                    keep_default_na=False,
                    engine=self._engine(),
                )
            except Exception as exc:
                raise WorkbookReadError(self.file_path, f"sheet {sheet_name!r}: {exc}") from exc
            self._frames[sheet_name] = df
        return self._frames[sheet_name]


class InMemoryWorkbookSource:
    """Sheets given as ``{sheet_name: [row_dict, ...]}``; keeps sheet order."""

    def __init__(
        self,
        sheets: Mapping[str, Sequence[Mapping[str, Any]]],
        headers: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._sheets = {name: [dict(r) for r in rows] for name, rows in sheets.items()}
        self._headers = {name: list(h) for name, h in (headers or {}).items()}

    def sheet_names(self) -> List[str]:
        return list(self._sheets.keys())

    def read_headers(self, sheet_name: str) -> List[str]:
        if sheet_name in self._headers:
            return list(self._headers[sheet_name])
        out: List[str] = []
        for row in self._sheets[sheet_name]:
            for key in row:
                if key not in out:
                    out.append(key)
        return out

    def read_rows(self, sheet_name: str) -> List[Row]:
        return [dict(r) for r in self._sheets[sheet_name]]


def open_workbook(file_path: str) -> ExcelWorkbookSource:
    """Open *file_path* eagerly so a bad path fails before any processing."""
    source = ExcelWorkbookSource(file_path)
    source.sheet_names()
    return source
