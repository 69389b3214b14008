"""Acting principal, as resolved by the upstream authentication layer."""

from dataclasses import dataclass
from typing import Optional

from app.security.rbac import Role


@dataclass(frozen=True)
class Actor:
    """Who is performing the current request."""

    id: str
    name: str
    role: Role
    email: Optional[str] = None
