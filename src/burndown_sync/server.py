import json
import os
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from burndown_sync.burndown import initialize, record_actual, show_summary
from burndown_sync.config import Config
from burndown_sync.logging_config import setup_logger
from burndown_sync.notion_client import NotionClient
from burndown_sync.sheet import BurndownSheet, open_worksheet

# Environment Setup
load_dotenv(os.path.join(os.getcwd(), ".env"))
logger = setup_logger("burndown_sync")

mcp = FastMCP("Burndown Sync")


def _connect(worksheet: Optional[str] = None):
    config = Config.load()
    config.validate()
    sheet = BurndownSheet(open_worksheet(config, worksheet))
    return sheet, NotionClient(config), config


# Internal implementations for testing
def _init_burndown_impl(worksheet: Optional[str] = None) -> str:
    """
    Writes the starting points and the ideal burndown line.
    """
    sheet, client, config = _connect(worksheet)
    values = initialize(sheet, client, config)
    return f"✅ Ideal line written on '{sheet.backend.title}': {values[0]} points over {len(values) - 1} days"


def _record_actual_impl(worksheet: Optional[str] = None) -> str:
    sheet, client, config = _connect(worksheet)
    row, remaining = record_actual(sheet, client, config)
    return f"✅ Recorded {remaining} remaining points in row {row} of '{sheet.backend.title}'"


def _show_points_impl(worksheet: Optional[str] = None) -> str:
    sheet, client, config = _connect(worksheet)
    return json.dumps(show_summary(sheet, client, config).to_dict())


@mcp.tool()
def init_burndown(worksheet: Optional[str] = None) -> str:
    """
    Writes the starting story points and the ideal burndown line for the sprint
    or epic named in the worksheet.
    """
    return _init_burndown_impl(worksheet)


@mcp.tool()
def record_actual_points(worksheet: Optional[str] = None) -> str:
    """
    Records the current remaining story points in the next empty actual cell.
    """
    return _record_actual_impl(worksheet)


@mcp.tool()
def show_points(worksheet: Optional[str] = None) -> str:
    """
    Returns the total and completed story points as JSON.
    """
    return _show_points_impl(worksheet)


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
