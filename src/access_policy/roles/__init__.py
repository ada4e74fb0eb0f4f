"""Permission sets, roles, and actor provisioning."""
from __future__ import annotations

from access_policy.roles.records import (
    ActorRoles,
    PermissionSetRecord,
    RoleRecord,
    load_held_permissions,
)
from access_policy.roles.store import PermissionSetNotFoundError, PermissionSetStore

__all__ = [
    "ActorRoles",
    "PermissionSetNotFoundError",
    "PermissionSetRecord",
    "PermissionSetStore",
    "RoleRecord",
    "load_held_permissions",
]
