from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

from ..core.constants import ADMIN_AUTHORITY


class AuthorityGate(Protocol):
    """Single capability check used by every view that gates on roles."""

    def has_authority(self, role: str) -> bool:
        raise NotImplementedError


def parse_authorities(raw: Any) -> tuple[str, ...]:
    """Accept ``[{"authority": "ROLE_X"}]`` as well as ``["ROLE_X"]``."""
    out: list[str] = []
    for item in raw or []:
        if isinstance(item, Mapping):
            value = item.get("authority")
        else:
            value = item
        if value:
            out.append(str(value))
    return tuple(out)


@dataclass(frozen=True)
class User:
    """Backend user as shown in admin screens."""

    user_id: int
    username: str
    name: str = ""
    email: str = ""
    enabled: bool = True
    roles: tuple[str, ...] = ()
    designation: str = ""
    specialization: str = ""
    bio: str = ""
    organization_name: Optional[str] = None

    @property
    def primary_role(self) -> str:
        return self.roles[0] if self.roles else "ROLE_USER"

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "User":
        roles = data.get("roles") or data.get("authorities") or []
        return cls(
            user_id=int(data["id"]),
            username=data.get("username") or "",
            name=data.get("name") or "",
            email=data.get("email") or "",
            enabled=bool(data.get("enabled", True)),
            roles=parse_authorities(roles),
            designation=data.get("designation") or "",
            specialization=data.get("specialization") or "",
            bio=data.get("bio") or "",
            organization_name=data.get("organizationName"),
        )


@dataclass(frozen=True)
class UserSession:
    """The signed-in user plus the backend credentials of that login.

    Built once at login, stored in the Flask session and handed explicitly to
    every service call.
    """

    user_id: int
    username: str
    name: str
    authorities: tuple[str, ...] = ()
    cookies: Mapping[str, str] = field(default_factory=dict)
    email: str = ""
    organization_name: Optional[str] = None

    def has_authority(self, role: str) -> bool:
        return role in self.authorities

    @property
    def is_admin(self) -> bool:
        return self.has_authority(ADMIN_AUTHORITY)

    @property
    def display_name(self) -> str:
        return self.name or self.username

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "name": self.name,
            "authorities": list(self.authorities),
            "cookies": dict(self.cookies),
            "email": self.email,
            "organization_name": self.organization_name,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserSession":
        return cls(
            user_id=int(data["user_id"]),
            username=data.get("username") or "",
            name=data.get("name") or "",
            authorities=tuple(data.get("authorities") or ()),
            cookies=dict(data.get("cookies") or {}),
            email=data.get("email") or "",
            organization_name=data.get("organization_name"),
        )

    @classmethod
    def from_status(cls, status: Mapping[str, Any], cookies: Mapping[str, str]) -> "UserSession":
        return cls(
            user_id=int(status["id"]),
            username=status.get("username") or "",
            name=status.get("name") or "",
            authorities=parse_authorities(status.get("authorities")),
            cookies=dict(cookies),
            email=status.get("email") or "",
            organization_name=status.get("organizationName"),
        )
