"""Authorization decision: combine a policy table with an actor.

For a requested action the table yields the set of permissions that would
authorize it.  The decision is then:

1. ALLOW when ``everyone`` is among them, whoever is asking.
2. DENY when there is no actor.
3. Otherwise ALLOW iff the actor's :class:`HeldPermissionSet` authorizes
   the requirement (``superuser`` always does).

An empty requirement is a valid DENY for everyone but a superuser.

Example
-------
>>> table = PolicyTable()
>>> table.permit("everyone", to="index")
>>> check(table, "index").allowed
True
>>> check(table, "edit", held=HeldPermissionSet.of("editor")).allowed
False
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from access_policy.decision.held import HeldPermissionSet
from access_policy.rules.table import PolicyTable

logger = logging.getLogger(__name__)

EVERYONE: str = "everyone"
"""Reserved permission name that authorizes an action without an actor."""


class Decision(str, Enum):
    """Outcome of an authorization check."""

    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class DecisionResult:
    """Immutable result of :func:`check`.

    Attributes
    ----------
    decision:
        ALLOW or DENY.
    action:
        The action that was checked.
    required:
        Permission names that would authorize the action.
    reason:
        Human-readable explanation of the decision.
    """

    decision: Decision
    action: str
    required: frozenset[str]
    reason: str

    @property
    def allowed(self) -> bool:
        return self.decision == Decision.ALLOW

    def __bool__(self) -> bool:
        """Return True if the action is allowed."""
        return self.allowed


class AccessDeniedError(Exception):
    """Raised by enforcing callers when a decision is DENY.

    Attributes
    ----------
    action:
        The denied action.
    required:
        Permission names any one of which would have authorized it.
    """

    def __init__(self, action: str, required: frozenset[str]) -> None:
        self.action = action
        self.required = required
        super().__init__(
            f"Access denied to action '{action}'; "
            f"requires one of {sorted(required)}"
        )


def check(
    table: PolicyTable,
    action: str,
    context: Mapping[str, object] | None = None,
    held: HeldPermissionSet | None = None,
) -> DecisionResult:
    """Decide whether an actor may perform ``action``.

    Parameters
    ----------
    table:
        Policy table of the scope handling the action.
    action:
        Requested action name.
    context:
        Mapping passed to conditional rules.  Used as given.
    held:
        The actor's held permissions, or ``None`` for no actor.

    Returns
    -------
    DecisionResult
    """
    action = str(action)
    required = table.required_permissions(action, context or {})
    required_list = sorted(required)

    if EVERYONE in required:
        logger.info("Everyone permitted to %s", action)
        return DecisionResult(Decision.ALLOW, action, required, "everyone permitted")

    if held is None:
        logger.info(
            "Denied %s with no actor; requires a permission in %s",
            action,
            required_list,
        )
        return DecisionResult(Decision.DENY, action, required, "no actor")

    if held.authorizes(required):
        logger.info(
            "Authorized %s having a permission in %s for %s",
            held,
            required_list,
            action,
        )
        reason = "superuser" if held.is_superuser else "holds a required permission"
        return DecisionResult(Decision.ALLOW, action, required, reason)

    logger.info(
        "Unauthorized %s having no permission in %s for %s",
        held,
        required_list,
        action,
    )
    return DecisionResult(
        Decision.DENY, action, required, "holds no required permission"
    )
