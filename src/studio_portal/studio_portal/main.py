from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common import authz
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .organizations.controller import register as register_organizations
from .projects.controller import register as register_projects
from .tasks.controller import register as register_tasks
from .timelogs.controller import register as register_timelogs
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
    # requests/urllib3 are chatty at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    page_size = int(getattr(settings, "DEFAULT_PAGE_SIZE", 10))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.logger.info("studio-portal settings=%s backend=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config, page_size=page_size)

    authz.init_app(app)
    register_users(app, container)
    register_organizations(app, container)
    register_projects(app, container)
    register_tasks(app, container)
    register_timelogs(app, container)
    register_attendance(app, container)

    return app
