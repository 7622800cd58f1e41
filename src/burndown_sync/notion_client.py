"""
Notion client for Burndown Sync.

Provides access to the Notion task database that backs the sprint board.
"""

import logging
from typing import List, Dict, Any, Optional

import requests

from burndown_sync.config import Config
from burndown_sync.exceptions import BurndownError
from burndown_sync.logging_config import log_function_call
from burndown_sync.models import Task
from burndown_sync.points import filter_members

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"

ASSIGN_PROPERTY = "Assign"
STORY_POINT_PROPERTY = "Story Point"
STATUS_PROPERTY = "Status"


def parse_task(page: Dict[str, Any]) -> Task:
    """
    Convert a Notion database page into a Task.

    Missing story points become 0 and a missing status becomes None.
    """
    properties = page.get("properties") or {}

    people = (properties.get(ASSIGN_PROPERTY) or {}).get("people") or []
    assignees = []
    for people_item in people:
        email = (people_item.get("person") or {}).get("email")
        if email:
            assignees.append(email)

    points = (properties.get(STORY_POINT_PROPERTY) or {}).get("number")
    select = (properties.get(STATUS_PROPERTY) or {}).get("select") or {}

    return Task(
        story_points=points or 0,
        status=select.get("name"),
        assignees=assignees,
        page_id=page.get("id"),
    )


class NotionClient:
    """Client for querying the Notion task database."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """Initialize Notion client."""
        self.config = config
        self.database_url = f"{NOTION_API_URL}/databases/{config.database_id}"
        self.session = session or requests.Session()
        self.session.headers.update(self.get_headers())

    def get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.notion_token}",
            "Notion-Version": self.config.notion_version,
            "Content-Type": "application/json",
        }

    def test_connection(self) -> bool:
        """Test the connection to the Notion database."""
        try:
            response = self.session.get(self.database_url, timeout=self.config.http_timeout)
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            raise ConnectionError(f"Failed to connect to Notion: {e}")

    def build_query(self, target_name: str, start_cursor: Optional[str] = None) -> Dict[str, Any]:
        """Build the query body selecting one sprint or epic."""
        payload: Dict[str, Any] = {
            "filter": {
                "property": self.config.filter_property,
                "select": {
                    "equals": target_name,
                },
            },
        }
        if start_cursor:
            payload["start_cursor"] = start_cursor
        return payload

    def query_database(self, target_name: str) -> List[Dict[str, Any]]:
        """
        Fetch every page of the database in a sprint or epic.

        Follows ``next_cursor`` until Notion reports no more results.

        Args:
            target_name: Sprint or epic name to select

        Returns:
            Raw Notion page objects
        """
        pages: List[Dict[str, Any]] = []
        cursor = None
        while True:
            response = self.session.post(
                f"{self.database_url}/query",
                json=self.build_query(target_name, cursor),
                timeout=self.config.http_timeout,
            )
            response.raise_for_status()
            data = response.json()

            results = data.get("results")
            if not isinstance(results, list):
                raise BurndownError("Unexpected Notion response: 'results' is missing")
            pages.extend(results)

            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break
            logger.debug(f"Fetching next page of '{target_name}' after {len(pages)} results")

        return pages

    @log_function_call(logger)
    def fetch_tasks(self, target_name: str) -> List[Task]:
        """
        Get the team's tasks for a sprint or epic.

        Args:
            target_name: Sprint or epic name

        Returns:
            Tasks assigned to at least one configured member
        """
        tasks = [parse_task(page) for page in self.query_database(target_name)]
        team_tasks = filter_members(tasks, self.config.members)
        logger.info(
            f"{len(team_tasks)} of {len(tasks)} tasks in '{target_name}' belong to the team"
        )
        return team_tasks
