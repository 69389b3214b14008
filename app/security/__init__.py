"""Security: RBAC and the acting principal. No FastAPI."""

from app.security.principal import Actor
from app.security.rbac import RBACService, Role, parse_role

__all__ = [
    "Actor",
    "RBACService",
    "Role",
    "parse_role",
]
