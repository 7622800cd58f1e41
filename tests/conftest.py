from __future__ import annotations

import logging
from typing import Any

import pytest
from gspread.utils import a1_to_rowcol

from burndown_sync.config import Config
from burndown_sync.sheet import BurndownSheet

# Keeps setup_logger from attaching stream handlers; records reach caplog.
logging.getLogger("burndown_sync").addHandler(logging.NullHandler())


class FakeSheet:
    """In-memory SheetBackend that trims reads the way gspread does."""

    def __init__(self, title: str = "Sprint 1") -> None:
        self.title = title
        self.cells: dict[tuple[int, int], Any] = {}
        self.writes: list[tuple[str, list[list[Any]]]] = []

    def set(self, a1: str, value: Any) -> None:
        self.cells[a1_to_rowcol(a1)] = value

    def get(self, a1: str) -> Any:
        return self.cells.get(a1_to_rowcol(a1), "")

    def _bounds(self, a1_range: str) -> tuple[int, int, int, int]:
        first, _, last = a1_range.partition(":")
        r1, c1 = a1_to_rowcol(first)
        r2, c2 = a1_to_rowcol(last or first)
        return r1, c1, r2, c2

    def read_range(self, a1_range: str) -> list[list[Any]]:
        r1, c1, r2, c2 = self._bounds(a1_range)
        rows = []
        for r in range(r1, r2 + 1):
            row = [self.cells.get((r, c), "") for c in range(c1, c2 + 1)]
            while row and row[-1] == "":
                row.pop()
            rows.append(row)
        while rows and not rows[-1]:
            rows.pop()
        return rows

    def write_range(self, a1_range: str, values: list[list[Any]]) -> None:
        self.writes.append((a1_range, values))
        r1, c1, _, _ = self._bounds(a1_range)
        for i, row in enumerate(values):
            for j, value in enumerate(row):
                self.cells[(r1 + i, c1 + j)] = value

    def last_row(self) -> int:
        filled = [r for (r, _), v in self.cells.items() if v != ""]
        return max(filled, default=0)


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, responses: list[FakeResponse] | None = None) -> None:
        self.headers: dict[str, str] = {}
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def _next(self) -> FakeResponse:
        return self.responses.pop(0)

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"method": "POST", "url": url, "json": json, "timeout": timeout})
        return self._next()

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, "timeout": timeout})
        return self._next()


def make_page(
    points: float | None = 1,
    status: str | None = "Not Started",
    emails: list[str] | None = None,
    page_id: str = "page",
) -> dict[str, Any]:
    return {
        "id": page_id,
        "properties": {
            "Assign": {"people": [{"person": {"email": e}} for e in (emails or [])]},
            "Story Point": {"number": points},
            "Status": {"select": {"name": status} if status else None},
        },
    }


def query_response(pages: list[dict[str, Any]], next_cursor: str | None = None) -> FakeResponse:
    return FakeResponse({
        "object": "list",
        "results": pages,
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    })


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        notion_token="secret-token",
        database_id="db123",
        members=["alice@example.com", "bob@example.com"],
        sheet_id="sheet-key",
        config_path=tmp_path / "config.env",
    )


@pytest.fixture
def fake_sheet() -> FakeSheet:
    sheet = FakeSheet()
    sheet.set("B3", "Sprint 1")
    sheet.set("A6", "Mon")
    for row in range(7, 12):
        sheet.set(f"A{row}", f"day {row - 6}")
    return sheet


@pytest.fixture
def burndown_sheet(fake_sheet: FakeSheet) -> BurndownSheet:
    return BurndownSheet(fake_sheet)
