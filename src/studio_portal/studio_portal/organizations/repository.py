from __future__ import annotations

from typing import Protocol

from .model import OrganizationSignup


class OrganizationRepository(Protocol):
    def register(self, signup: OrganizationSignup) -> None:
        """Create the organization and its first admin (public endpoint)."""
        raise NotImplementedError
