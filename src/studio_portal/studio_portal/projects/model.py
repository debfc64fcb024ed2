from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import ProjectCategory, ProjectPriority, ProjectStage, ProjectStatus


def _date_or_none(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        return None


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


@dataclass(frozen=True)
class ProjectFilters:
    """Filter set of the project list; every value is optional."""

    category: Optional[ProjectCategory] = None
    priority: Optional[ProjectPriority] = None
    status: Optional[ProjectStatus] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "ProjectFilters":
        """Unknown values are dropped rather than sent to the backend."""
        return cls(
            category=ProjectCategory.parse(args.get("category")),
            priority=ProjectPriority.parse(args.get("priority")),
            status=ProjectStatus.parse(args.get("status")),
        )

    def as_params(self) -> dict[str, Optional[str]]:
        return {
            "category": self.category.value if self.category else None,
            "priority": self.priority.value if self.priority else None,
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class ProjectTaskSummary:
    task_id: int
    name: str
    status: Optional[str] = None
    assignee: Optional[str] = None


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    client_name: str = ""
    location: str = ""
    description: str = ""
    category: Optional[ProjectCategory] = None
    status: Optional[ProjectStatus] = None
    stage: Optional[ProjectStage] = None
    priority: Optional[ProjectPriority] = None
    start_date: Optional[date] = None
    estimated_end_date: Optional[date] = None
    budget: Optional[Decimal] = None
    actual_cost: Optional[Decimal] = None

    @property
    def cost_status(self) -> Optional[str]:
        if not self.budget or not self.actual_cost:
            return None
        return "Over Budget" if self.actual_cost > self.budget else "Under Budget"

    @property
    def status_css_class(self) -> str:
        if not self.status:
            return ""
        return "status-" + self.status.value.lower().replace("_", "-")

    @property
    def priority_css_class(self) -> str:
        if not self.priority:
            return ""
        return self.priority.value.lower() + "-priority"

    def form_values(self) -> dict[str, str]:
        """Values to pre-fill the edit form with."""
        return {
            "name": self.name,
            "clientName": self.client_name,
            "startDate": self.start_date.isoformat() if self.start_date else "",
            "estimatedEndDate": self.estimated_end_date.isoformat() if self.estimated_end_date else "",
            "location": self.location,
            "projectCategory": self.category.value if self.category else "",
            "status": self.status.value if self.status else "",
            "projectStage": self.stage.value if self.stage else "",
            "description": self.description,
            "budget": str(self.budget) if self.budget is not None else "",
            "actualCost": str(self.actual_cost) if self.actual_cost is not None else "",
            "priority": self.priority.value if self.priority else "",
        }

    @classmethod
    def from_api(cls, data: Mapping[str, Any], *, project_id: Optional[int] = None) -> "Project":
        return cls(
            project_id=int(data["id"]) if data.get("id") is not None else int(project_id or 0),
            name=data.get("name") or "",
            client_name=data.get("clientName") or "",
            location=data.get("location") or "",
            description=data.get("description") or "",
            category=ProjectCategory.parse(data.get("projectCategory")),
            status=ProjectStatus.parse(data.get("status")),
            stage=ProjectStage.parse(data.get("projectStage")),
            priority=ProjectPriority.parse(data.get("priority")),
            start_date=_date_or_none(data.get("startDate")),
            estimated_end_date=_date_or_none(data.get("estimatedEndDate")),
            budget=_decimal_or_none(data.get("budget")),
            actual_cost=_decimal_or_none(data.get("actualCost")),
        )


@dataclass(frozen=True)
class ProjectDetails:
    project: Project
    tasks: tuple[ProjectTaskSummary, ...] = ()
