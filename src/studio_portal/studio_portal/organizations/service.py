from __future__ import annotations

import logging
from typing import Mapping

from ..common.validators import require_min_length
from ..core.constants import MIN_ADMIN_PASSWORD_LENGTH
from ..core.exceptions import ApiError, RejectedError, ValidationError
from .model import OrganizationSignup
from .repository import OrganizationRepository

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "Organization registered successfully! You can now login with your admin credentials."

_REQUIRED = (
    ("organizationName", "Organization name is required"),
    ("organizationEmail", "Organization email is required"),
    ("adminName", "Admin name is required"),
    ("adminUsername", "Admin username is required"),
    ("adminEmail", "Admin email is required"),
    ("adminPassword", "Admin password is required"),
)


def _value(form: Mapping[str, str], key: str) -> str:
    return (form.get(key) or "").strip()


class OrganizationService:
    def __init__(self, organizations: OrganizationRepository):
        self._organizations = organizations

    @staticmethod
    def check_organization_step(form: Mapping[str, str]) -> None:
        """First step of the sign-up wizard: the organization part only."""
        if not _value(form, "organizationName") or not _value(form, "organizationEmail"):
            raise ValidationError("Please fill in the required organization fields")

    @staticmethod
    def validate(form: Mapping[str, str]) -> OrganizationSignup:
        for key, message in _REQUIRED:
            if not _value(form, key):
                raise ValidationError(message)

        password = form.get("adminPassword") or ""
        if password != (form.get("confirmPassword") or ""):
            raise ValidationError("Passwords do not match")
        require_min_length(password, "Password", MIN_ADMIN_PASSWORD_LENGTH)

        return OrganizationSignup(
            organization_name=_value(form, "organizationName"),
            organization_email=_value(form, "organizationEmail"),
            admin_name=_value(form, "adminName"),
            admin_username=_value(form, "adminUsername"),
            admin_email=_value(form, "adminEmail"),
            admin_password=password,
            organization_description=_value(form, "organizationDescription"),
            organization_phone=_value(form, "organizationPhone"),
            organization_address=_value(form, "organizationAddress"),
            organization_website=_value(form, "organizationWebsite"),
        )

    def register(self, form: Mapping[str, str]) -> OrganizationSignup:
        signup = self.validate(form)
        try:
            self._organizations.register(signup)
        except RejectedError as e:
            raise ValidationError(e.detail or "Registration failed")
        except ApiError as e:
            logger.warning("Organization sign-up for %s failed: %s", signup.organization_name, e.message)
            raise ValidationError(e.detail or "Registration failed. Please try again.")
        logger.info("Organization %s registered (admin=%s)", signup.organization_name, signup.admin_username)
        return signup
