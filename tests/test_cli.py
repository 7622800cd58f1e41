from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from burndown_sync import __version__, cli
from burndown_sync.notion_client import NotionClient

from conftest import FakeResponse, FakeSession, make_page, query_response


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, config, fake_sheet):
    """Point the CLI at the in-memory sheet and a scripted Notion session."""
    session = FakeSession()
    opened = []

    def fake_open(cfg, worksheet=None):
        opened.append(worksheet)
        return fake_sheet

    monkeypatch.setattr(cli, "load_config", lambda ctx: config)
    monkeypatch.setattr(cli, "open_worksheet", fake_open)
    monkeypatch.setattr(cli, "NotionClient", lambda cfg: NotionClient(cfg, session=session))
    return session, opened


def pages() -> list[dict]:
    return [
        make_page(points=5, status="Completed", emails=["alice@example.com"]),
        make_page(points=5, status="Review", emails=["bob@example.com"]),
    ]


@pytest.mark.unit
def test_version() -> None:
    result = CliRunner().invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.integration
def test_show_prints_points(wired) -> None:
    session, opened = wired
    session.responses.append(query_response(pages()))

    result = CliRunner().invoke(cli.main, ["-w", "Sprint 1", "show"])

    assert result.exit_code == 0, result.output
    assert opened == ["Sprint 1"]
    assert json.loads(result.output.strip().splitlines()[-1]) == {"all": 10, "completed": 5}


@pytest.mark.integration
def test_init_writes_ideal_line(wired, fake_sheet) -> None:
    session, _ = wired
    session.responses.append(query_response(pages()))

    result = CliRunner().invoke(cli.main, ["init"])

    assert result.exit_code == 0, result.output
    assert "Ideal line written" in result.output
    assert [fake_sheet.get(f"E{row}") for row in range(6, 12)] == [10, 8, 6, 4, 2, 0]


@pytest.mark.integration
def test_record_writes_actual(wired, fake_sheet) -> None:
    session, _ = wired
    session.responses.append(query_response(pages()))
    fake_sheet.set("F6", 10)

    result = CliRunner().invoke(cli.main, ["record"])

    assert result.exit_code == 0, result.output
    assert "row 7" in result.output
    assert fake_sheet.get("F7") == 5


@pytest.mark.integration
def test_not_a_target_sheet_exits_with_error(wired, fake_sheet) -> None:
    fake_sheet.set("B3", "")

    result = CliRunner().invoke(cli.main, ["show"])

    assert result.exit_code == 1
    assert "not a target sheet" in result.output


@pytest.mark.integration
def test_status_reports_connections(wired) -> None:
    session, _ = wired
    session.responses.append(FakeResponse({}, status_code=401))

    result = CliRunner().invoke(cli.main, ["status"])

    assert result.exit_code == 0, result.output
    assert "✗ Notion: Failed" in result.output
    assert "✓ Google Sheets: Connected (Sprint 1)" in result.output
