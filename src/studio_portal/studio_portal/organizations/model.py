from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrganizationSignup:
    organization_name: str
    organization_email: str
    admin_name: str
    admin_username: str
    admin_email: str
    admin_password: str
    organization_description: str = ""
    organization_phone: str = ""
    organization_address: str = ""
    organization_website: str = ""

    def as_payload(self) -> dict[str, str]:
        return {
            "organizationName": self.organization_name,
            "organizationDescription": self.organization_description,
            "organizationEmail": self.organization_email,
            "organizationPhone": self.organization_phone,
            "organizationAddress": self.organization_address,
            "organizationWebsite": self.organization_website,
            "adminName": self.admin_name,
            "adminUsername": self.admin_username,
            "adminEmail": self.admin_email,
            "adminPassword": self.admin_password,
        }
