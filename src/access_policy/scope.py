"""PolicyScope: the declaration and decision surface of one scope.

A scope owns a :class:`PolicyTable`.  Rules are declared with
:meth:`PolicyScope.permit` and :meth:`PolicyScope.restrict`; child scopes
are created explicitly with :meth:`PolicyScope.derive`, which copies the
table so the child can add rules without affecting its parent.

Permissions are additive across rules: an actor holding two permissions,
one permitted to an action and one restricted from it, is still authorized
because at least one held permission vouches for the action.

Example
-------
::

    from access_policy import HeldPermissionSet, PolicyScope

    articles = PolicyScope("articles")
    articles.permit("everyone", to=["index", "show"])
    articles.permit("editor")                       # every action
    articles.restrict("editor", from_="destroy")

    archive = articles.derive("archive")
    archive.restrict("editor", to="show")

    articles.decide("destroy", HeldPermissionSet.of("editor")).allowed  # False
    archive.decide("show").allowed                                      # True
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Callable

from access_policy.conditions import ACTOR_KEY
from access_policy.decision.authorization import (
    AccessDeniedError,
    DecisionResult,
    check,
)
from access_policy.decision.held import HeldPermissionSet
from access_policy.rules.rule import ActionSpec, Condition, RuleKind
from access_policy.rules.table import PolicyTable

logger = logging.getLogger(__name__)

AccessDeniedHook = Callable[[DecisionResult], None]


class PolicyScope:
    """A named authorization scope with its own policy table.

    Parameters
    ----------
    name:
        Identifier used in log messages and policy documents.
    table:
        Existing table to use.  A new empty table is created when omitted.
    parent:
        Name of the scope this one was derived from, if any.
    on_access_denied:
        Optional callback invoked by :meth:`enforce` before it raises.
        Inherited by derived scopes.
    """

    def __init__(
        self,
        name: str,
        table: PolicyTable | None = None,
        parent: str | None = None,
        on_access_denied: AccessDeniedHook | None = None,
    ) -> None:
        self._name = name
        self._table = table if table is not None else PolicyTable()
        self._parent = parent
        self._on_access_denied = on_access_denied

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def permit(
        self,
        *names: str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> None:
        """Permit the named permissions to the given actions (all by default)."""
        self._table.add_rule(
            names, RuleKind.PERMIT, to=to, from_=from_, condition=condition
        )

    def restrict(
        self,
        *names: str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> None:
        """Restrict the named permissions.

        ``from_`` withholds the listed actions.  ``to`` instead withholds
        every action except the listed ones.  With neither, every action is
        withheld.
        """
        self._table.add_rule(
            names, RuleKind.RESTRICT, to=to, from_=from_, condition=condition
        )

    def derive(self, name: str) -> PolicyScope:
        """Create a child scope starting from a copy of this scope's rules."""
        logger.debug("Deriving scope %s from %s", name, self._name)
        return PolicyScope(
            name,
            table=self._table.derive_child(),
            parent=self._name,
            on_access_denied=self._on_access_denied,
        )

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def decide(
        self,
        action: str,
        held: HeldPermissionSet | None = None,
        context: Mapping[str, object] | None = None,
    ) -> DecisionResult:
        """Decide whether ``held`` may perform ``action`` in this scope.

        The context handed to conditions contains ``actor`` (the held set or
        ``None``) unless the caller supplies that key explicitly.
        """
        effective_context: dict[str, object] = {ACTOR_KEY: held}
        effective_context.update(context or {})
        return check(self._table, action, effective_context, held)

    def enforce(
        self,
        action: str,
        held: HeldPermissionSet | None = None,
        context: Mapping[str, object] | None = None,
    ) -> DecisionResult:
        """Like :meth:`decide` but raise when the action is denied.

        Raises
        ------
        AccessDeniedError
            When the decision is DENY.  The ``on_access_denied`` callback, if
            any, runs first.
        """
        result = self.decide(action, held, context)
        if result.allowed:
            return result
        if self._on_access_denied is not None:
            self._on_access_denied(result)
        raise AccessDeniedError(result.action, result.required)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> str | None:
        return self._parent

    @property
    def table(self) -> PolicyTable:
        return self._table

    def __repr__(self) -> str:
        return f"PolicyScope(name={self._name!r}, parent={self._parent!r})"
