"""
Story point arithmetic for the burndown chart.

Covers the team membership filter, the total/completed aggregation and the
ideal burndown line.
"""

from typing import Iterable, List, Sequence

from burndown_sync.exceptions import BurndownError
from burndown_sync.models import Number, PointSummary, Task


def is_member(task: Task, members: Iterable[str]) -> bool:
    """Return True when at least one assignee is on the team."""
    allowed = set(members)
    return any(email in allowed for email in task.assignees)


def filter_members(tasks: Iterable[Task], members: Iterable[str]) -> List[Task]:
    """Keep only the tasks assigned to someone on the team."""
    allowed = set(members)
    return [task for task in tasks if is_member(task, allowed)]


def summarize_points(tasks: Iterable[Task], done_statuses: Iterable[str]) -> PointSummary:
    """
    Total the story points of a set of tasks.

    Args:
        tasks: Tasks to aggregate
        done_statuses: Status names that count as completed

    Returns:
        The total points and the points of completed tasks
    """
    done = set(done_statuses)
    summary = PointSummary()
    for task in tasks:
        points = task.story_points or 0
        summary.total += points
        if task.status is not None and task.status in done:
            summary.completed += points
    return summary


def ideal_line(total: Number, holidays: Sequence[bool]) -> List[float]:
    """
    Build the ideal burndown line.

    The first value is the starting total. Each following value is derived
    from the previous one: held on holidays, otherwise reduced by
    ``total / work_days``. Because the decrement is applied repeatedly the
    last value can drift from zero by floating point error.

    Args:
        total: Story points at the start of the sprint
        holidays: One flag per day after the start row, True for holidays

    Returns:
        ``len(holidays) + 1`` values, starting with ``total``
    """
    holiday_count = sum(1 for flag in holidays if flag)
    work_days = len(holidays) - holiday_count
    if work_days <= 0:
        raise BurndownError(
            f"No work days to burn down over ({len(holidays)} days, {holiday_count} holidays)"
        )

    decrement = total / work_days
    values = [total]
    for is_holiday in holidays:
        previous = values[-1]
        values.append(previous if is_holiday else previous - decrement)
    return values
