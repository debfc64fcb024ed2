from __future__ import annotations

from dataclasses import dataclass

from .api.client import ApiClient, ApiConfig
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT_SECONDS
from .organizations.http_organization_repository import HttpOrganizationRepository
from .organizations.service import OrganizationService
from .projects.http_project_repository import HttpProjectRepository
from .projects.service import ProjectService
from .tasks.http_task_repository import HttpTaskRepository
from .tasks.service import TaskService
from .timelogs.http_timelog_repository import HttpTimeLogRepository
from .timelogs.service import TimeLogService
from .users.http_user_repository import HttpUserRepository
from .users.service import AuthService, RegistrationService, UserService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    registration_service: RegistrationService
    organization_service: OrganizationService
    project_service: ProjectService
    task_service: TaskService
    timelog_service: TimeLogService
    attendance_service: AttendanceService


def build_container(*, api_config: dict, page_size: int = DEFAULT_PAGE_SIZE) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout_seconds=float(api_config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
    )
    client = ApiClient(config)

    users_repo = HttpUserRepository(client)
    organizations_repo = HttpOrganizationRepository(client)
    projects_repo = HttpProjectRepository(client)
    tasks_repo = HttpTaskRepository(client)
    timelogs_repo = HttpTimeLogRepository(client)
    attendance_repo = HttpAttendanceRepository(client)

    return Container(
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        registration_service=RegistrationService(users_repo),
        organization_service=OrganizationService(organizations_repo),
        project_service=ProjectService(projects_repo, page_size=page_size),
        task_service=TaskService(tasks_repo, page_size=page_size),
        timelog_service=TimeLogService(timelogs_repo),
        attendance_service=AttendanceService(attendance_repo),
    )
