"""Authorization decisions combining policy tables with held permissions."""
from __future__ import annotations

from access_policy.decision.authorization import (
    EVERYONE,
    AccessDeniedError,
    Decision,
    DecisionResult,
    check,
)
from access_policy.decision.held import SUPERUSER, HeldPermissionSet

__all__ = [
    "EVERYONE",
    "SUPERUSER",
    "AccessDeniedError",
    "Decision",
    "DecisionResult",
    "HeldPermissionSet",
    "check",
]
