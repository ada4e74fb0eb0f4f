"""Per-permission rule evaluation.

A :class:`PermissionPolicy` holds the ordered rules declared for one
permission name and answers whether holding that permission would be
enough to perform a given action.

Rules are applied in declaration order against an :class:`EvaluationState`:

- A rule scoped to all actions resets the state and sets the default.
- ``restrict ... to [a, b]`` resets to deny, then permits ``a`` and ``b``.
- Any other rule moves its listed actions into the permitted or restricted
  set, removing them from the opposite one.  Later rules win.

If no rule mentions an action, the default applies, and the default
starts out as RESTRICT.

Example
-------
>>> policy = PermissionPolicy("administrator")
>>> policy.append(Rule.build("permit"))
>>> policy.append(Rule.build("restrict", from_="destroy"))
>>> policy.evaluate("index"), policy.evaluate("destroy")
(True, False)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from access_policy.rules.rule import ActionScope, Rule, RuleKind

logger = logging.getLogger(__name__)


@dataclass
class EvaluationState:
    """Mutable scratch state used while folding rules for one action."""

    default: RuleKind = RuleKind.RESTRICT
    permitted: set[str] = field(default_factory=set)
    restricted: set[str] = field(default_factory=set)

    def reset(self, kind: RuleKind) -> None:
        self.default = kind
        self.permitted.clear()
        self.restricted.clear()

    def verdict(self, action: str) -> bool:
        """Return the outcome for ``action`` once all rules are applied."""
        if action in self.permitted:
            return True
        if action in self.restricted:
            return False
        return self.default == RuleKind.PERMIT


class PermissionPolicy:
    """Ordered permit/restrict rules for a single named permission.

    Parameters
    ----------
    name:
        The permission identifier, unique within a
        :class:`~access_policy.rules.table.PolicyTable`.
    rules:
        Initial rules, copied into a fresh list.
    """

    def __init__(self, name: str, rules: list[Rule] | None = None) -> None:
        self._name = name
        self._rules: list[Rule] = list(rules or [])

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------

    def append(self, rule: Rule) -> None:
        """Append a rule.  Rules are never removed or reordered."""
        self._rules.append(rule)

    def copy(self) -> PermissionPolicy:
        """Return a policy with its own rule list sharing the same Rule values."""
        return PermissionPolicy(self._name, self._rules)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        action: str,
        context: Mapping[str, object] | None = None,
    ) -> bool:
        """Answer whether holding this permission authorizes ``action``.

        Parameters
        ----------
        action:
            The action name being requested.
        context:
            Mapping handed to conditional rules.  Defaults to an empty dict.

        Returns
        -------
        bool
            ``True`` when the action ends up permitted for this permission.
        """
        action = str(action)
        state = self.evaluate_rules(action, context or {})
        result = state.verdict(action)
        logger.debug(
            "Permission %s %s for action=%s (default=%s)",
            self._name,
            "applies" if result else "does not apply",
            action,
            state.default.value,
        )
        return result

    def evaluate_rules(
        self,
        action: str,
        context: Mapping[str, object],
    ) -> EvaluationState:
        """Fold every rule in force for ``action`` into a fresh state."""
        state = EvaluationState()
        for rule in self._rules:
            if rule.in_force(action, context):
                self.apply(state, rule)
        return state

    @classmethod
    def apply(cls, state: EvaluationState, rule: Rule) -> None:
        """Apply one rule to ``state`` in place."""
        scope = rule.scope
        if scope.is_all:
            state.reset(rule.kind)
        elif rule.kind == RuleKind.RESTRICT and scope.to is not None:
            # Restricting *to* a list denies everything else.
            state.reset(RuleKind.RESTRICT)
            cls.apply(state, Rule(RuleKind.PERMIT, ActionScope(to=scope.to)))
        else:
            if rule.kind == RuleKind.PERMIT:
                target, other, actions = state.permitted, state.restricted, scope.to
            else:
                target, other, actions = state.restricted, state.permitted, scope.from_
            for action in actions or ():
                target.add(action)
                other.discard(action)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in declaration order."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"PermissionPolicy(name={self._name!r}, rules={len(self._rules)})"
