"""Example: call the service layer directly, without Flask.

Controllers stay thin; the use cases live in the services.
"""

import importlib
import os

from config import get_settings_module

from src.studio_portal.studio_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG)

    user = container.auth_service.login(os.environ["PORTAL_USERNAME"], os.environ["PORTAL_PASSWORD"])
    listing = container.project_service.list_projects(user, page=0)
    for project in listing.items:
        print(project.project_id, project.name, project.status.label if project.status else "-")
    print(listing.pagination)


if __name__ == "__main__":
    main()
