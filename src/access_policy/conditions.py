"""Named condition predicates for conditional rules.

Conditions take the decision context mapping and return a bool.  Policy
documents refer to them by name, so they are kept in a
:class:`ConditionRegistry`.

Example
-------
>>> registry = ConditionRegistry.with_builtins()
>>> registry.get("has_actor")({"actor": None})
False
"""
from __future__ import annotations

import logging
from collections.abc import Mapping

from access_policy.rules.rule import Condition

logger = logging.getLogger(__name__)

ACTOR_KEY: str = "actor"


def has_actor(context: Mapping[str, object]) -> bool:
    """Return True when the context carries an authenticated actor."""
    return context.get(ACTOR_KEY) is not None


class ConditionRegistry:
    """Name to predicate lookup used when loading policy documents."""

    def __init__(self, conditions: dict[str, Condition] | None = None) -> None:
        self._conditions: dict[str, Condition] = dict(conditions or {})

    @classmethod
    def with_builtins(cls) -> ConditionRegistry:
        return cls({"has_actor": has_actor})

    def register(self, name: str, condition: Condition) -> None:
        """Register ``condition`` under ``name``, replacing any previous entry."""
        if name in self._conditions:
            logger.warning("Replacing registered condition %s", name)
        self._conditions[name] = condition

    def get(self, name: str) -> Condition:
        """Return the predicate registered as ``name``.

        Raises
        ------
        KeyError
            If no condition has that name.
        """
        try:
            return self._conditions[name]
        except KeyError:
            raise KeyError(
                f"Unknown condition {name!r}. Known: {sorted(self._conditions)}"
            ) from None

    @property
    def names(self) -> list[str]:
        return sorted(self._conditions)

    def __contains__(self, name: object) -> bool:
        return name in self._conditions
