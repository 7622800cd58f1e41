"""
Google Sheets access for Burndown Sync.

The burndown logic talks to a small ``SheetBackend`` interface so the
worksheet can be swapped for an in-memory grid in tests.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

import gspread

from burndown_sync.config import Config
from burndown_sync.exceptions import NotTargetSheetError

logger = logging.getLogger(__name__)


class SheetBackend(Protocol):
    title: str

    def read_range(self, a1_range: str) -> List[List[Any]]:
        ...

    def write_range(self, a1_range: str, values: List[List[Any]]) -> None:
        ...

    def last_row(self) -> int:
        ...


class GspreadSheet:
    """SheetBackend backed by a gspread worksheet."""

    def __init__(self, worksheet: gspread.Worksheet):
        self.worksheet = worksheet
        self.title = worksheet.title

    def read_range(self, a1_range: str) -> List[List[Any]]:
        return list(self.worksheet.get(a1_range))

    def write_range(self, a1_range: str, values: List[List[Any]]) -> None:
        self.worksheet.update(range_name=a1_range, values=values, value_input_option="USER_ENTERED")

    def last_row(self) -> int:
        return len(self.worksheet.get_all_values())


def open_worksheet(config: Config, worksheet: Optional[str] = None) -> GspreadSheet:
    """
    Open the burndown worksheet with a service account.

    Args:
        config: Loaded configuration
        worksheet: Worksheet title, overriding ``config.worksheet``

    Returns:
        The worksheet wrapped as a SheetBackend
    """
    config.validate()
    gc = gspread.service_account(filename=config.credentials_path)
    spreadsheet = gc.open_by_key(config.sheet_id)

    title = worksheet or config.worksheet
    ws = spreadsheet.worksheet(title) if title else spreadsheet.sheet1
    logger.info(f"Opened worksheet '{ws.title}' of spreadsheet {config.sheet_id}")
    return GspreadSheet(ws)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _column(rows: List[List[Any]], length: int) -> List[Any]:
    """Flatten a single-column range, padding the rows gspread trims."""
    values = [row[0] if row else "" for row in rows[:length]]
    return values + [""] * (length - len(values))


@dataclass
class SheetLayout:
    """Fixed cell positions of the burndown worksheet."""
    target_cell: str = "B3"
    holiday_column: str = "D"
    ideal_column: str = "E"
    actual_column: str = "F"
    start_row: int = 6
    actual_end_row: int = 20


class BurndownSheet:
    """Reads and writes the burndown cells of one worksheet."""

    def __init__(self, backend: SheetBackend, layout: Optional[SheetLayout] = None):
        self.backend = backend
        self.layout = layout or SheetLayout()

    def target_name(self) -> str:
        """Return the sprint or epic name, or raise if the sheet has none."""
        rows = self.backend.read_range(self.layout.target_cell)
        value = rows[0][0] if rows and rows[0] else ""
        name = str(value).strip() if not _is_blank(value) else ""
        if not name:
            raise NotTargetSheetError(
                f"'{self.backend.title}' is not a target sheet: "
                f"no sprint or epic name in {self.layout.target_cell}"
            )
        return name

    def last_row(self) -> int:
        return self.backend.last_row()

    def holiday_flags(self, last_row: int) -> List[bool]:
        """Holiday flag for each row after the start row, up to ``last_row``."""
        first = self.layout.start_row + 1
        if last_row < first:
            return []
        col = self.layout.holiday_column
        rows = self.backend.read_range(f"{col}{first}:{col}{last_row}")
        return [not _is_blank(value) for value in _column(rows, last_row - first + 1)]

    def write_start(self, points: Any) -> None:
        """Write the starting points into both the ideal and actual cells."""
        row = self.layout.start_row
        self.backend.write_range(
            f"{self.layout.ideal_column}{row}:{self.layout.actual_column}{row}",
            [[points, points]],
        )

    def write_ideal(self, values: List[Any]) -> None:
        """Write ideal values for the rows following the start row."""
        if not values:
            return
        col = self.layout.ideal_column
        first = self.layout.start_row + 1
        last = first + len(values) - 1
        self.backend.write_range(f"{col}{first}:{col}{last}", [[v] for v in values])

    def next_actual_row(self) -> int:
        """Row of the first unrecorded actual value."""
        col = self.layout.actual_column
        start, end = self.layout.start_row, self.layout.actual_end_row
        rows = self.backend.read_range(f"{col}{start}:{col}{end}")
        filled = sum(1 for value in _column(rows, end - start + 1) if not _is_blank(value))
        return start + filled

    def write_actual(self, row: int, value: Any) -> None:
        self.backend.write_range(f"{self.layout.actual_column}{row}", [[value]])
