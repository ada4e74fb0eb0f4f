"""access-policy: permit/restrict rule evaluation and authorization decisions.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import access_policy as ap
>>> scope = ap.PolicyScope("articles")
>>> scope.permit("everyone", to="index")
>>> scope.permit("editor")
>>> scope.decide("index").allowed
True
>>> scope.decide("edit", ap.HeldPermissionSet.of("editor")).allowed
True
>>> scope.decide("edit").allowed
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
from access_policy.rules.policy import EvaluationState, PermissionPolicy
from access_policy.rules.rule import ALL_ACTIONS, ActionScope, Rule, RuleKind
from access_policy.rules.table import PolicyTable

# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------
from access_policy.decision.authorization import (
    EVERYONE,
    AccessDeniedError,
    Decision,
    DecisionResult,
    check,
)
from access_policy.decision.held import SUPERUSER, HeldPermissionSet

# ---------------------------------------------------------------------------
# Scopes and conditions
# ---------------------------------------------------------------------------
from access_policy.conditions import ConditionRegistry, has_actor
from access_policy.scope import PolicyScope

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
from access_policy.roles.records import (
    ActorRoles,
    PermissionSetRecord,
    RoleRecord,
    load_held_permissions,
)
from access_policy.roles.store import PermissionSetNotFoundError, PermissionSetStore

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from access_policy.config.loader import LoadedPolicies, PolicyConfigError, PolicyLoader

__all__ = [
    "__version__",
    # Rules
    "ALL_ACTIONS",
    "ActionScope",
    "EvaluationState",
    "PermissionPolicy",
    "PolicyTable",
    "Rule",
    "RuleKind",
    # Decisions
    "EVERYONE",
    "SUPERUSER",
    "AccessDeniedError",
    "Decision",
    "DecisionResult",
    "HeldPermissionSet",
    "check",
    # Scopes and conditions
    "ConditionRegistry",
    "PolicyScope",
    "has_actor",
    # Roles
    "ActorRoles",
    "PermissionSetNotFoundError",
    "PermissionSetRecord",
    "PermissionSetStore",
    "RoleRecord",
    "load_held_permissions",
    # Configuration
    "LoadedPolicies",
    "PolicyConfigError",
    "PolicyLoader",
]
