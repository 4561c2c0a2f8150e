"""
Pure role gates over the team role hierarchy (OWNER > ADMIN > WRITE > READ).
The ensure_* helpers raise HTTPException for use inside route handlers.
"""

from fastapi import HTTPException, status
from modeler.config.permissions_config import ACCESS_LEVELS, INVITABLE_ROLES, PERMISSION_MATRIX
from modeler.modules.teams.models import TeamRole
from typing import Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)


def requires(role: Optional[TeamRole], allowed: Iterable[TeamRole]) -> bool:
    return role is not None and role in set(allowed)


def requires_write(role: Optional[TeamRole]) -> bool:
    return requires(role, ACCESS_LEVELS["write"])


def requires_admin(role: Optional[TeamRole]) -> bool:
    return requires(role, ACCESS_LEVELS["admin"])


def requires_owner(role: Optional[TeamRole]) -> bool:
    return requires(role, ACCESS_LEVELS["owner"])


def role_permissions(role: TeamRole) -> List[str]:
    return PERMISSION_MATRIX["roles"][role.value]


def has_permission(role: Optional[TeamRole], permission: str) -> bool:
    return role is not None and permission in role_permissions(role)


def ensure_permission(role: Optional[TeamRole], permission: str) -> TeamRole:
    """Raise 403 unless role grants permission, e.g. "entities:update"."""
    if not has_permission(role, permission):
        logger.info("Denied %s for role %s", permission, role.value if role else None)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient team role. Required: {permission}"
        )
    return role


def can_invite(actor: Optional[TeamRole], target: TeamRole) -> bool:
    return actor is not None and target in INVITABLE_ROLES.get(actor, ())


def ensure_can_assign(actor: Optional[TeamRole], target: TeamRole) -> None:
    """Invite/role-change gate: 403 when actor may not hand out roles at all,
    400 when the requested role is above what actor may grant."""
    if actor not in INVITABLE_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only team owners and admins can assign roles"
        )
    if not can_invite(actor, target):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{actor.value} cannot assign the {target.value} role"
        )
