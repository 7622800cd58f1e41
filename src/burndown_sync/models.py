from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

Number = Union[int, float]


class TaskStatus(str, Enum):
    NOT_STARTED = "Not Started"
    PROGRESS = "Progress"
    REVIEW = "Review"
    QA = "QA"
    COMPLETED = "Completed"


@dataclass
class Task:
    story_points: Number = 0
    status: Optional[str] = None
    assignees: List[str] = field(default_factory=list)
    page_id: Optional[str] = None


@dataclass
class PointSummary:
    total: Number = 0
    completed: Number = 0

    @property
    def remaining(self) -> Number:
        return self.total - self.completed

    def to_dict(self) -> Dict[str, Number]:
        return {"all": self.total, "completed": self.completed}
