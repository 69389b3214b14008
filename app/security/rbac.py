"""Role-based access control. No FastAPI."""

from enum import Enum

from app.security.exceptions import AuthorizationError


class Role(Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


# Permission matrix, limited to actions this service enforces:
# Role    View audit
# ADMIN   ✓
# EDITOR  ✗
# VIEWER  ✗

VIEW_AUDIT = "view_audit"

_ACTION_PERMISSIONS: dict[tuple[Role, str], bool] = {
    (Role.ADMIN, VIEW_AUDIT): True,
    (Role.EDITOR, VIEW_AUDIT): False,
    (Role.VIEWER, VIEW_AUDIT): False,
}


def parse_role(value: str) -> Role:
    """Role from its wire name, case-insensitive. Raises AuthorizationError for unknown roles."""
    try:
        return Role(value.strip().lower())
    except ValueError as e:
        raise AuthorizationError(f"Unknown role '{value}'") from e


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: Role, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        key = (role, action)
        if key not in _ACTION_PERMISSIONS or not _ACTION_PERMISSIONS[key]:
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
