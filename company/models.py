"""
Purpose: Company-level records.
What it does:
- CompanySettings: white-label branding (name, slogan, logo, colors)
- AdminUser: back-office user metadata (the login itself lives with the auth provider)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict


class UserRole(str, Enum):
    MASTER = "MASTER"
    BASIC = "BASIC"


@dataclass(frozen=True)
class CompanySettings:
    name: str = "RODOVAR"
    slogan: str = "Logística Inteligente"
    logo_url: str = ""
    primary_color: str = "#FFD700"
    background_color: str = "#121212"
    card_color: str = "#1E1E1E"
    text_color: str = "#F5F5F5"

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CompanySettings:
        """
        Stored settings are merged over the defaults, so a partial document
        (say, only a new logo) still yields a complete theme.
        """
        known = {_camel(f.name): f.name for f in fields(cls)}
        values = {known[key]: value for key, value in (data or {}).items() if key in known and value is not None}
        return cls(**values)


@dataclass(frozen=True)
class AdminUser:
    username: str
    email: str = ""
    role: UserRole = UserRole.BASIC

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "email": self.email, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AdminUser:
        return cls(
            username=data["username"],
            email=data.get("email") or "",
            role=UserRole(data.get("role") or UserRole.BASIC.value),
        )


DEFAULT_ADMIN = AdminUser(username="admin", email="admin@rodovar.com", role=UserRole.MASTER)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
