"""
Burndown procedures.

Each procedure reads the sprint or epic name from the worksheet, fetches the
team's tasks and either fills the ideal line, records today's actual
remaining points or reports the totals.
"""

import logging
from typing import List, Tuple

from burndown_sync.config import Config
from burndown_sync.models import Number, PointSummary
from burndown_sync.notion_client import NotionClient
from burndown_sync.points import ideal_line, summarize_points
from burndown_sync.sheet import BurndownSheet

logger = logging.getLogger(__name__)


def fetch_summary(sheet: BurndownSheet, client: NotionClient, config: Config) -> PointSummary:
    """Total and completed points of the sheet's sprint or epic."""
    target = sheet.target_name()
    tasks = client.fetch_tasks(target)
    summary = summarize_points(tasks, config.done_statuses)
    logger.info(f"'{target}': {summary.total} points, {summary.completed} completed")
    return summary


def initialize(sheet: BurndownSheet, client: NotionClient, config: Config) -> List[float]:
    """
    Write the starting points and the ideal burndown line.

    Args:
        sheet: Burndown worksheet
        client: Notion client
        config: Loaded configuration

    Returns:
        The ideal values, starting with the total at the start row
    """
    summary = fetch_summary(sheet, client, config)

    # Nothing is written unless the whole line can be computed.
    last_row = sheet.last_row()
    holidays = sheet.holiday_flags(last_row)
    values = ideal_line(summary.total, holidays)

    sheet.write_start(summary.total)
    sheet.write_ideal(values[1:])

    logger.info(
        f"Ideal line written for {len(holidays)} days "
        f"({sum(holidays)} holidays) from {summary.total} points"
    )
    return values


def record_actual(sheet: BurndownSheet, client: NotionClient, config: Config) -> Tuple[int, Number]:
    """
    Record the current remaining points in the next empty actual cell.

    Returns:
        The row written and the remaining points
    """
    summary = fetch_summary(sheet, client, config)
    row = sheet.next_actual_row()
    if row > sheet.layout.actual_end_row:
        logger.warning(
            f"Actual column is full up to row {sheet.layout.actual_end_row}; writing row {row}"
        )
    sheet.write_actual(row, summary.remaining)
    logger.info(f"Recorded {summary.remaining} remaining points in row {row}")
    return row, summary.remaining


def show_summary(sheet: BurndownSheet, client: NotionClient, config: Config) -> PointSummary:
    return fetch_summary(sheet, client, config)
