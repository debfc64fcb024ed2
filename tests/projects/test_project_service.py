from __future__ import annotations

from decimal import Decimal

import pytest

from src.studio_portal.studio_portal.core.enums import ProjectCategory, ProjectStatus
from src.studio_portal.studio_portal.core.exceptions import AuthorizationError, ValidationError
from src.studio_portal.studio_portal.projects.model import Project, ProjectFilters
from src.studio_portal.studio_portal.projects.service import ProjectService
from src.studio_portal.studio_portal.users.model import UserSession

ADMIN = UserSession(user_id=1, username="admin", name="Admin", authorities=("ROLE_ADMIN",), cookies={"JSESSIONID": "adm"})
MEMBER = UserSession(user_id=2, username="ada", name="Ada", authorities=("ROLE_USER",), cookies={"JSESSIONID": "ada"})

VALID_FORM = {
    "name": "Harbour Library",
    "clientName": "City of Porto",
    "startDate": "2026-03-01",
    "estimatedEndDate": "2027-01-31",
    "location": "Porto",
    "projectCategory": "ARCHITECTURE",
    "status": "PROGRESS",
    "projectStage": "STAGE_02_CONCEPT_DESIGN",
    "description": "  New public library  ",
}


class InMemoryProjects:
    def __init__(self, count: int):
        self.projects = [
            {"id": i + 1, "name": f"Project {i + 1}", "status": "PROGRESS", "projectCategory": "INTERIOR"}
            for i in range(count)
        ]
        self.list_calls: list[dict] = []
        self.saved: list[dict] = []
        self.deleted: list[int] = []

    def list_page(self, *, cookies, page, size, filters):
        self.list_calls.append({"cookies": dict(cookies), "page": page, "size": size, "filters": dict(filters)})
        rows = [p for p in self.projects if all(p.get(_FILTER_KEYS[k]) == v for k, v in filters.items())]
        start = page * size
        total_pages = (len(rows) + size - 1) // size
        return {
            "projects": rows[start:start + size],
            "currentPage": page,
            "totalItems": len(rows),
            "totalPages": total_pages,
            "hasNext": page + 1 < total_pages,
            "hasPrevious": page > 0,
        }

    def get_details(self, *, cookies, project_id):
        return None

    def get_for_edit(self, *, cookies, project_id):
        for p in self.projects:
            if p["id"] == project_id:
                return Project.from_api(p)
        return None

    def create(self, *, cookies, form):
        self.saved.append(dict(form))
        return 42

    def update(self, *, cookies, project_id, form):
        self.saved.append({"id": project_id, **form})

    def delete(self, *, cookies, project_id):
        self.deleted.append(project_id)
        self.projects = [p for p in self.projects if p["id"] != project_id]


_FILTER_KEYS = {"category": "projectCategory", "priority": "priority", "status": "status"}


def test_list_uses_actor_cookies_and_page_size():
    repo = InMemoryProjects(25)
    listing = ProjectService(repo, page_size=10).list_projects(MEMBER, page=1)

    assert [c["page"] for c in repo.list_calls] == [0, 1]
    assert all(c["cookies"] == {"JSESSIONID": "ada"} and c["size"] == 10 for c in repo.list_calls)
    assert [p.project_id for p in listing.items] == list(range(11, 21))
    assert listing.pagination.has_next and listing.pagination.has_previous
    assert listing.items[0].category is ProjectCategory.INTERIOR


def test_unknown_filter_values_are_dropped():
    filters = ProjectFilters.from_args({"category": "interior", "status": "WHATEVER", "priority": ""})
    assert filters == ProjectFilters(category=ProjectCategory.INTERIOR)

    repo = InMemoryProjects(3)
    ProjectService(repo).list_projects(MEMBER, filters=filters)
    assert repo.list_calls[0]["filters"] == {"category": "INTERIOR"}


def test_create_validates_and_trims():
    repo = InMemoryProjects(0)
    project_id = ProjectService(repo).create(MEMBER, VALID_FORM)

    assert project_id == 42
    assert repo.saved[0]["description"] == "New public library"
    assert repo.saved[0]["projectCategory"] == "ARCHITECTURE"
    assert "budget" not in repo.saved[0]


@pytest.mark.parametrize(
    "override,message",
    [
        ({"name": " "}, "Project name is required"),
        ({"startDate": ""}, "Start date is required"),
        ({"estimatedEndDate": "2026-01-01"}, "cannot be before the start date"),
        ({"projectCategory": "CASTLE"}, "Category is not valid"),
        ({"projectStage": ""}, "Project stage is required"),
    ],
)
def test_create_rejects_invalid_forms(override, message):
    repo = InMemoryProjects(0)
    with pytest.raises(ValidationError, match=message):
        ProjectService(repo).create(MEMBER, {**VALID_FORM, **override})
    assert repo.saved == []


def test_update_is_admin_only_and_sends_costs():
    repo = InMemoryProjects(1)
    service = ProjectService(repo)
    form = {**VALID_FORM, "budget": "1000", "actualCost": "1200.50", "priority": "high"}

    with pytest.raises(AuthorizationError):
        service.update(MEMBER, 1, form)

    service.update(ADMIN, 1, form)
    assert repo.saved[0]["budget"] == "1000"
    assert repo.saved[0]["actualCost"] == "1200.50"
    assert repo.saved[0]["priority"] == "HIGH"


def test_cost_status():
    over = Project(project_id=1, name="x", budget=Decimal("100"), actual_cost=Decimal("150"))
    under = Project(project_id=1, name="x", budget=Decimal("100"), actual_cost=Decimal("50"))
    assert over.cost_status == "Over Budget"
    assert under.cost_status == "Under Budget"
    assert Project(project_id=1, name="x").cost_status is None


def test_edit_form_values_round_trip_into_update():
    repo = InMemoryProjects(1)
    repo.projects[0].update({"clientName": "Acme", "location": "Lisbon", "startDate": "2026-01-05", "projectStage": "STAGE_01_PREPARATION_BRIEF"})
    service = ProjectService(repo)

    values = service.get_for_edit(ADMIN, 1).form_values()
    assert values["status"] == ProjectStatus.PROGRESS.value
    service.update(ADMIN, 1, values)
    assert repo.saved[0]["clientName"] == "Acme"


def test_delete_only_item_on_page_two_goes_back_to_page_one():
    repo = InMemoryProjects(11)
    listing = ProjectService(repo, page_size=10).delete(ADMIN, 11, page=1)

    assert repo.deleted == [11]
    assert [c["page"] for c in repo.list_calls] == [0, 1, 0]
    assert listing.pagination.current_page == 0
    assert len(listing.items) == 10


def test_delete_keeps_page_when_items_remain():
    repo = InMemoryProjects(15)
    listing = ProjectService(repo, page_size=10).delete(ADMIN, 12, page=1)

    assert [c["page"] for c in repo.list_calls] == [0, 1, 1]
    assert [p.project_id for p in listing.items] == [11, 13, 14, 15]


def test_delete_requires_admin():
    repo = InMemoryProjects(3)
    with pytest.raises(AuthorizationError):
        ProjectService(repo).delete(MEMBER, 1)
    assert repo.deleted == []


def test_missing_project():
    with pytest.raises(ValidationError, match="Project not found"):
        ProjectService(InMemoryProjects(0)).get_details(MEMBER, 5)


def test_page_past_the_end_falls_back_to_first_page():
    repo = InMemoryProjects(5)
    listing = ProjectService(repo, page_size=10).list_projects(MEMBER, page=7)

    assert [c["page"] for c in repo.list_calls] == [0]
    assert listing.pagination.current_page == 0
    assert len(listing.items) == 5
