"""Policy document loading."""
from __future__ import annotations

from access_policy.config.loader import LoadedPolicies, PolicyConfigError, PolicyLoader
from access_policy.config.schema import (
    PermissionSetSpec,
    PolicyDocument,
    RuleSpec,
    ScopeSpec,
)

__all__ = [
    "LoadedPolicies",
    "PermissionSetSpec",
    "PolicyConfigError",
    "PolicyDocument",
    "PolicyLoader",
    "RuleSpec",
    "ScopeSpec",
]
