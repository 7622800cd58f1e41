"""
Configuration management for Burndown Sync.

Handles loading and managing configuration from environment variables
and configuration files.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, List

from dotenv import load_dotenv

from burndown_sync.models import TaskStatus


DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_FILTER_PROPERTY = "Sprint"
DEFAULT_DONE_STATUSES = [TaskStatus.COMPLETED.value]
DEFAULT_CREDENTIALS_PATH = "service_account.json"
DEFAULT_HTTP_TIMEOUT = 30.0


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated setting, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Configuration manager for burndown-sync."""

    DEFAULT_CONFIG_PATH = Path.home() / ".burndown-sync" / "config.env"

    def __init__(
        self,
        notion_token: Optional[str] = None,
        database_id: Optional[str] = None,
        notion_version: str = DEFAULT_NOTION_VERSION,
        members: Optional[List[str]] = None,
        filter_property: str = DEFAULT_FILTER_PROPERTY,
        done_statuses: Optional[List[str]] = None,
        sheet_id: Optional[str] = None,
        worksheet: Optional[str] = None,
        credentials_path: str = DEFAULT_CREDENTIALS_PATH,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        config_path: Optional[Path] = None,
    ):
        """Initialize configuration."""
        self.notion_token = notion_token
        self.database_id = database_id
        self.notion_version = notion_version
        self.members = list(members or [])
        self.filter_property = filter_property
        self.done_statuses = list(done_statuses or DEFAULT_DONE_STATUSES)
        self.sheet_id = sheet_id
        self.worksheet = worksheet
        self.credentials_path = credentials_path
        self.http_timeout = http_timeout
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment and config file.

        Priority order:
        1. Environment variables
        2. Config file (if specified)
        3. Default config file location
        """
        path = config_path or cls.DEFAULT_CONFIG_PATH
        if path.exists():
            load_dotenv(path)

        timeout = os.getenv("BURNDOWN_HTTP_TIMEOUT")
        return cls(
            notion_token=os.getenv("NOTION_TOKEN"),
            database_id=os.getenv("NOTION_DATABASE_ID"),
            notion_version=os.getenv("NOTION_VERSION") or DEFAULT_NOTION_VERSION,
            members=split_list(os.getenv("BURNDOWN_MEMBERS")),
            filter_property=os.getenv("BURNDOWN_FILTER_PROPERTY") or DEFAULT_FILTER_PROPERTY,
            done_statuses=split_list(os.getenv("BURNDOWN_DONE_STATUSES")) or None,
            sheet_id=os.getenv("GOOGLE_SHEET_ID"),
            worksheet=os.getenv("GOOGLE_WORKSHEET") or None,
            credentials_path=os.getenv("GOOGLE_APPLICATION_CREDENTIALS", DEFAULT_CREDENTIALS_PATH),
            http_timeout=float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT,
            config_path=path,
        )

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from a specific file."""
        return cls.load(Path(config_path))

    @classmethod
    def create_default(cls) -> "Config":
        """Create a default configuration file."""
        config_path = cls.DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)

        template = """# Burndown Sync Configuration
# Configure your Notion and Google Sheets access here

# Notion task database
NOTION_TOKEN=your-integration-token
NOTION_DATABASE_ID=your-database-id

# Team members whose tasks count towards the burndown
BURNDOWN_MEMBERS=alice@example.com,bob@example.com

# Group tasks by Sprint or Epic
BURNDOWN_FILTER_PROPERTY=Sprint

# Statuses counted as done (e.g. Completed or Completed,QA)
BURNDOWN_DONE_STATUSES=Completed

# Google Sheets
GOOGLE_SHEET_ID=your-spreadsheet-key
GOOGLE_WORKSHEET=
GOOGLE_APPLICATION_CREDENTIALS=service_account.json
"""

        if not config_path.exists():
            config_path.write_text(template)

        return cls.load(config_path)

    def validate(self) -> bool:
        """Validate that all required configuration is present."""
        required_fields = [
            ("notion_token", "NOTION_TOKEN"),
            ("database_id", "NOTION_DATABASE_ID"),
            ("sheet_id", "GOOGLE_SHEET_ID"),
        ]

        missing = []
        for field, env_var in required_fields:
            if not getattr(self, field):
                missing.append(env_var)

        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                f"Please set these in your environment or config file at {self.config_path}"
            )

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "database_id": self.database_id,
            "notion_version": self.notion_version,
            "members": self.members,
            "filter_property": self.filter_property,
            "done_statuses": self.done_statuses,
            "sheet_id": self.sheet_id,
            "worksheet": self.worksheet,
            "config_path": str(self.config_path),
        }
