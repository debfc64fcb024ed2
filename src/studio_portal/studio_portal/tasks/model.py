from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import ProjectStage, TaskPriority, TaskStatus
from ..users.model import AuthorityGate


@dataclass(frozen=True)
class TaskPerson:
    user_id: int
    username: str
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> Optional["TaskPerson"]:
        if not data or data.get("id") is None:
            return None
        return cls(user_id=int(data["id"]), username=data.get("username") or "", name=data.get("name") or "")


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_date(value: Any) -> Optional[date]:
    parsed = _parse_datetime(str(value)[:10]) if value else None
    return parsed.date() if parsed else None


@dataclass(frozen=True)
class Task:
    task_id: int
    name: str
    description: str = ""
    status: Optional[TaskStatus] = None
    stage: Optional[ProjectStage] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    project_id: Optional[int] = None
    project_name: str = ""
    assignee: Optional[TaskPerson] = None
    reporter: Optional[TaskPerson] = None
    checked_by: Optional[TaskPerson] = None

    @property
    def stage_short_label(self) -> str:
        """Stage name without its ``Stage 0x:`` prefix."""
        if not self.stage:
            return ""
        return self.stage.label.split(": ", 1)[-1]

    @property
    def status_css_class(self) -> str:
        if not self.status:
            return "status-to-do"
        return "status-" + self.status.value.lower().replace("_", "-")

    @property
    def priority_css_class(self) -> str:
        if not self.priority:
            return "priority-medium"
        return "priority-" + self.priority.value.lower()

    def can_edit(self, user: AuthorityGate) -> bool:
        """Assignee, reporter and checker may edit a task."""
        user_id = getattr(user, "user_id", None)
        if user_id is None:
            return False
        return any(p is not None and p.user_id == user_id for p in (self.assignee, self.reporter, self.checked_by))

    def form_values(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "projectStage": self.stage.value if self.stage else "",
            "status": self.status.value if self.status else "",
        }

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Task":
        project = data.get("project") or {}
        return cls(
            task_id=int(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            status=TaskStatus.parse(data.get("status")),
            stage=ProjectStage.parse(data.get("projectStage")),
            priority=TaskPriority.parse(data.get("priority")),
            due_date=_parse_date(data.get("dueDate")),
            created_at=_parse_datetime(data.get("createdAt")),
            project_id=int(project["id"]) if project.get("id") is not None else None,
            project_name=project.get("name") or "",
            assignee=TaskPerson.from_api(data.get("assignee")),
            reporter=TaskPerson.from_api(data.get("reporter")),
            checked_by=TaskPerson.from_api(data.get("checkedBy")),
        )
