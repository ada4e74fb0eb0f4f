"""Rule evaluation: rules, per-permission policies, and policy tables.

Example
-------
::

    from access_policy.rules import PolicyTable

    table = PolicyTable()
    table.permit("editor", to=["edit", "update"])
    table.required_permissions("edit")   # frozenset({"editor"})
"""
from __future__ import annotations

from access_policy.rules.policy import EvaluationState, PermissionPolicy
from access_policy.rules.rule import (
    ALL_ACTIONS,
    ActionScope,
    Condition,
    Rule,
    RuleKind,
)
from access_policy.rules.table import PolicyTable

__all__ = [
    "ALL_ACTIONS",
    "ActionScope",
    "Condition",
    "EvaluationState",
    "PermissionPolicy",
    "PolicyTable",
    "Rule",
    "RuleKind",
]
