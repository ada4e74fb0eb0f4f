"""PolicyTable: named permission policies for one authorization scope.

A table is built once when a scope is declared.  Child scopes start from
an independent copy of their parent's table and append their own rules,
so a child can narrow or widen inherited permissions without touching the
parent or any sibling.

Example
-------
::

    base = PolicyTable()
    base.permit("superpowers", "administrator")

    child = base.derive_child()
    child.restrict("administrator", to=["publish", "archive"])

    base.required_permissions("edit")    # {"superpowers", "administrator"}
    child.required_permissions("edit")   # {"superpowers"}
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from access_policy.rules.policy import PermissionPolicy
from access_policy.rules.rule import ActionSpec, Condition, Rule, RuleKind

logger = logging.getLogger(__name__)


def _permission_names(names: str | Iterable[str]) -> list[str]:
    if isinstance(names, str):
        names = [names]
    flat = [str(name) for name in names if name is not None]
    if not flat:
        raise ValueError("At least one permission name is required.")
    return flat


class PolicyTable:
    """Mapping from permission name to :class:`PermissionPolicy`.

    Looking up a name through :meth:`get_or_create_policy` creates an empty
    policy on first use.  An empty policy never applies to any action, so a
    misspelled permission name silently denies instead of raising.
    """

    def __init__(self, policies: dict[str, PermissionPolicy] | None = None) -> None:
        self._policies: dict[str, PermissionPolicy] = dict(policies or {})

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def get_or_create_policy(self, name: str) -> PermissionPolicy:
        """Return the policy for ``name``, creating an empty one if needed."""
        policy = self._policies.get(name)
        if policy is None:
            policy = PermissionPolicy(name)
            self._policies[name] = policy
            logger.debug("Created policy for permission %s", name)
        return policy

    def add_rule(
        self,
        names: str | Iterable[str],
        kind: RuleKind | str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> Rule:
        """Append one rule to every named permission's policy.

        The same immutable :class:`Rule` value is shared by all targeted
        policies.

        Parameters
        ----------
        names:
            A permission name or an iterable of names.
        kind:
            ``permit`` or ``restrict``.
        to, from_:
            Action name, iterable of action names, or ``"all"``.  Supplying
            neither means every action.
        condition:
            Optional predicate over the decision context.

        Returns
        -------
        Rule
            The rule that was appended.
        """
        rule = Rule.build(kind, to=to, from_=from_, condition=condition)
        for name in _permission_names(names):
            self.get_or_create_policy(name).append(rule)
            logger.debug("Added rule to %s: %s", name, rule)
        return rule

    def permit(
        self,
        *names: str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> None:
        self.add_rule(names, RuleKind.PERMIT, to=to, from_=from_, condition=condition)

    def restrict(
        self,
        *names: str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> None:
        self.add_rule(names, RuleKind.RESTRICT, to=to, from_=from_, condition=condition)

    def derive_child(self) -> PolicyTable:
        """Return an independent copy for a child scope.

        Each policy gets its own rule list, so rules appended to the child
        never show up in this table.
        """
        return PolicyTable({name: policy.copy() for name, policy in self._policies.items()})

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def required_permissions(
        self,
        action: str,
        context: Mapping[str, object] | None = None,
    ) -> frozenset[str]:
        """Return the names of every permission that would authorize ``action``."""
        effective_context = context or {}
        return frozenset(
            name
            for name, policy in self._policies.items()
            if policy.evaluate(action, effective_context)
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get(self, name: str) -> PermissionPolicy | None:
        """Return the policy for ``name`` without creating it."""
        return self._policies.get(name)

    @property
    def names(self) -> list[str]:
        """Permission names in the order they were first referenced."""
        return list(self._policies)

    def __contains__(self, name: object) -> bool:
        return name in self._policies

    def __iter__(self) -> Iterator[PermissionPolicy]:
        return iter(self._policies.values())

    def __len__(self) -> int:
        return len(self._policies)

    def __repr__(self) -> str:
        return f"PolicyTable(permissions={self.names!r})"
