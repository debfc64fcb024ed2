from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.datetime_utils import parse_optional_date
from ..common.pagination import PaginatedListController
from ..common.validators import parse_optional_decimal, require_choice, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import ProjectCategory, ProjectPriority, ProjectStage, ProjectStatus
from ..core.exceptions import ValidationError
from ..users.model import UserSession
from ..users.service import require_admin
from .model import Project, ProjectDetails, ProjectFilters
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


def _project_form(form: Mapping[str, str], *, with_costs: bool) -> dict[str, str]:
    """Validate the create/edit form and return what is sent to the backend."""
    data = {
        "name": require_non_empty(form.get("name"), "Project name"),
        "clientName": require_non_empty(form.get("clientName"), "Client name"),
        "location": require_non_empty(form.get("location"), "Location"),
        "description": (form.get("description") or "").strip(),
    }

    start = parse_optional_date(form.get("startDate"), "Start date")
    if start is None:
        raise ValidationError("Start date is required")
    end = parse_optional_date(form.get("estimatedEndDate"), "Estimated end date")
    if end is not None and end < start:
        raise ValidationError("Estimated end date cannot be before the start date")
    data["startDate"] = start.isoformat()
    data["estimatedEndDate"] = end.isoformat() if end else ""

    data["projectCategory"] = require_choice(form.get("projectCategory"), ProjectCategory, "Category", required=True).value
    data["status"] = require_choice(form.get("status"), ProjectStatus, "Status", required=True).value
    data["projectStage"] = require_choice(form.get("projectStage"), ProjectStage, "Project stage", required=True).value

    if with_costs:
        priority = require_choice(form.get("priority"), ProjectPriority, "Priority")
        budget = parse_optional_decimal(form.get("budget"), "Budget")
        actual = parse_optional_decimal(form.get("actualCost"), "Actual cost")
        if (budget is not None and budget < 0) or (actual is not None and actual < 0):
            raise ValidationError("Costs cannot be negative")
        data["priority"] = priority.value if priority else ""
        data["budget"] = str(budget) if budget is not None else ""
        data["actualCost"] = str(actual) if actual is not None else ""
    return data


class ProjectService:
    def __init__(self, projects: ProjectRepository, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._projects = projects
        self._page_size = int(page_size)

    def list_controller(self, actor: UserSession, filters: Optional[ProjectFilters] = None) -> PaginatedListController[Project]:
        """A list controller bound to the actor's backend session."""

        def fetch(*, page: int, size: int, filters: Mapping[str, str]):
            return self._projects.list_page(cookies=actor.cookies, page=page, size=size, filters=filters)

        return PaginatedListController(
            fetch,
            items_key="projects",
            parse_item=Project.from_api,
            page_size=self._page_size,
            filters=(filters or ProjectFilters()).as_params(),
            error_message="Failed to load projects",
        )

    def list_projects(self, actor: UserSession, *, page: int = 0, filters: Optional[ProjectFilters] = None) -> PaginatedListController[Project]:
        controller = self.list_controller(actor, filters)
        controller.open_page(max(int(page), 0))
        return controller

    def get_details(self, actor: UserSession, project_id: int) -> ProjectDetails:
        details = self._projects.get_details(cookies=actor.cookies, project_id=int(project_id))
        if not details:
            raise ValidationError("Project not found")
        return details

    def get_for_edit(self, actor: UserSession, project_id: int) -> Project:
        require_admin(actor)
        project = self._projects.get_for_edit(cookies=actor.cookies, project_id=int(project_id))
        if not project:
            raise ValidationError("Project not found")
        return project

    def create(self, actor: UserSession, form: Mapping[str, str]) -> Optional[int]:
        data = _project_form(form, with_costs=False)
        project_id = self._projects.create(cookies=actor.cookies, form=data)
        logger.info("%s created project %s (id=%s)", actor.username, data["name"], project_id)
        return project_id

    def update(self, actor: UserSession, project_id: int, form: Mapping[str, str]) -> None:
        require_admin(actor)
        data = _project_form(form, with_costs=True)
        self._projects.update(cookies=actor.cookies, project_id=int(project_id), form=data)
        logger.info("%s updated project %s", actor.username, project_id)

    def delete(self, actor: UserSession, project_id: int, *, page: int = 0, filters: Optional[ProjectFilters] = None) -> PaginatedListController[Project]:
        """Delete a project shown on ``page`` and return the list to show next.

        The current page is loaded first so deleting its last item can step
        back one page.
        """
        require_admin(actor)
        controller = self.list_controller(actor, filters)
        controller.open_page(max(int(page), 0))
        self._projects.delete(cookies=actor.cookies, project_id=int(project_id))
        logger.info("%s deleted project %s", actor.username, project_id)
        controller.reload_after_delete()
        return controller
