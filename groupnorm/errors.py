"""Exceptions raised by the normalization pipeline."""


class WorkbookReadError(Exception):
    """The source workbook (or one of its sheets) could not be read.

    This is the only fatal condition of a run: no report is produced.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read workbook {path}: {reason}")
