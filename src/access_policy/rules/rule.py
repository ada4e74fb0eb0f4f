"""Rule primitives: permit/restrict instructions scoped to actions.

A :class:`Rule` pairs a :class:`RuleKind` with an :class:`ActionScope` and an
optional condition.  Rules are immutable; policies only ever append them.

Example
-------
>>> rule = Rule.build(RuleKind.RESTRICT, from_="destroy")
>>> rule.scope.from_
('destroy',)
>>> rule.scope.is_all
False
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

ALL_ACTIONS: str = "all"
"""Marker accepted by ``to`` / ``from_`` meaning every action."""

Condition = Callable[[Mapping[str, object]], bool]
ActionSpec = Union[str, Iterable[str], None]


class RuleKind(str, Enum):
    """Whether a rule grants or withholds an action."""

    PERMIT = "permit"
    RESTRICT = "restrict"


def _normalise_actions(actions: ActionSpec) -> tuple[str, ...] | None:
    """Turn a ``to``/``from_`` argument into a deduplicated tuple.

    ``None`` stays ``None`` (the option was not supplied).  A single name
    becomes a one-element tuple.  Declaration order is kept.
    """
    if actions is None:
        return None
    if isinstance(actions, str):
        return (actions,)
    seen: dict[str, None] = {}
    for action in actions:
        seen.setdefault(str(action), None)
    return tuple(seen)


# ---------------------------------------------------------------------------
# ActionScope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActionScope:
    """The set of actions a rule applies to.

    Attributes
    ----------
    to:
        Actions listed under ``to``, or ``None`` when not supplied.
    from_:
        Actions listed under ``from``, or ``None`` when not supplied.
    all_actions:
        ``True`` when either option was the :data:`ALL_ACTIONS` marker.
    """

    to: tuple[str, ...] | None = None
    from_: tuple[str, ...] | None = None
    all_actions: bool = False

    @classmethod
    def build(cls, to: ActionSpec = None, from_: ActionSpec = None) -> ActionScope:
        """Build a scope from user-facing ``to`` / ``from_`` arguments."""
        all_actions = to == ALL_ACTIONS or from_ == ALL_ACTIONS
        return cls(
            to=None if to == ALL_ACTIONS else _normalise_actions(to),
            from_=None if from_ == ALL_ACTIONS else _normalise_actions(from_),
            all_actions=all_actions,
        )

    @property
    def is_all(self) -> bool:
        """Return True when the scope resets every action."""
        return self.all_actions or (self.to is None and self.from_ is None)

    def covers(self, action: str) -> bool:
        """Return True if ``action`` is within this scope."""
        if self.is_all:
            return True
        return action in (self.to or ()) or action in (self.from_ or ())

    def describe(self) -> str:
        if self.is_all:
            return "all actions"
        parts: list[str] = []
        if self.to is not None:
            parts.append(f"to {list(self.to)}")
        if self.from_ is not None:
            parts.append(f"from {list(self.from_)}")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Rule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A single permit/restrict instruction.

    Attributes
    ----------
    kind:
        :attr:`RuleKind.PERMIT` or :attr:`RuleKind.RESTRICT`.
    scope:
        The actions the rule applies to.
    condition:
        Optional predicate over the decision context.  ``None`` means the
        rule is always in force.
    """

    kind: RuleKind
    scope: ActionScope = ActionScope()
    condition: Condition | None = None

    @classmethod
    def build(
        cls,
        kind: RuleKind | str,
        to: ActionSpec = None,
        from_: ActionSpec = None,
        condition: Condition | None = None,
    ) -> Rule:
        """Build a Rule from authoring-style arguments.

        Raises
        ------
        ValueError
            If ``kind`` is not ``permit`` or ``restrict``.
        """
        try:
            rule_kind = RuleKind(kind)
        except ValueError as exc:
            raise ValueError(
                f"Rule kind must be 'permit' or 'restrict'; got {kind!r}."
            ) from exc
        return cls(
            kind=rule_kind,
            scope=ActionScope.build(to=to, from_=from_),
            condition=condition,
        )

    def in_force(self, action: str, context: Mapping[str, object]) -> bool:
        """Return True if the rule should be applied when evaluating ``action``.

        Unconditional rules are always applied.  A conditional rule only runs
        its predicate when its scope covers ``action``; exceptions raised by
        the predicate propagate to the caller.
        """
        if self.condition is None:
            return True
        if not self.scope.covers(action):
            return False
        return bool(self.condition(context))

    def __str__(self) -> str:
        suffix = " (conditional)" if self.condition is not None else ""
        return f"{self.kind.value} {self.scope.describe()}{suffix}"
