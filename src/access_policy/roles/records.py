"""Persistence-shaped records for permission sets and roles.

A :class:`PermissionSetRecord` is a named list of permission tokens.  A
:class:`RoleRecord` joins an actor to one permission set, and
:class:`ActorRoles` gathers every role an actor holds.  Storage is up to
the caller; these records only describe the shape and the authorization
rules that apply to it.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from access_policy.decision.held import SUPERUSER, HeldPermissionSet


def flatten_names(values: Iterable[object]) -> list[str]:
    """Flatten nested lists/tuples/sets of names, dropping ``None``."""
    flat: list[str] = []
    for value in values:
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            flat.extend(flatten_names(value))
        else:
            flat.append(str(value))
    return flat


@dataclass
class PermissionSetRecord:
    """A named collection of permission tokens.

    Attributes
    ----------
    name:
        Unique name of the permission set (e.g. ``"administrator"``).
    permissions:
        Permission tokens, possibly including ``superuser``.
    """

    name: str
    permissions: list[str] = field(default_factory=list)

    @property
    def tokens(self) -> frozenset[str]:
        """Permission tokens normalised to strings."""
        return frozenset(str(token) for token in self.permissions if token is not None)

    def authorized(self, *required: object) -> bool:
        """Return True if this set satisfies any of ``required``.

        ``required`` may be given as separate arguments or nested lists;
        ``None`` entries are ignored.
        """
        tokens = self.tokens
        if SUPERUSER in tokens:
            return True
        names = flatten_names(required)
        if not names:
            return False
        return not tokens.isdisjoint(names)


@dataclass
class RoleRecord:
    """Associates an actor with one permission set."""

    actor_id: str
    permission_set: PermissionSetRecord

    @property
    def name(self) -> str:
        return self.permission_set.name

    def authorized(self, *required: object) -> bool:
        return self.permission_set.authorized(*required)


@dataclass
class ActorRoles:
    """All roles held by one actor."""

    actor_id: str
    roles: list[RoleRecord] = field(default_factory=list)

    def authorized(self, *required: object) -> bool:
        """Return True if any role is authorized for ``required``."""
        return any(role.authorized(*required) for role in self.roles)

    def held_permissions(self) -> HeldPermissionSet:
        """Union of every role's permission tokens."""
        return load_held_permissions(self.roles)

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    def __iter__(self) -> Iterator[RoleRecord]:
        return iter(self.roles)


def load_held_permissions(roles: Iterable[RoleRecord]) -> HeldPermissionSet:
    """Build the :class:`HeldPermissionSet` for a collection of roles."""
    tokens: set[str] = set()
    for role in roles:
        tokens |= role.permission_set.tokens
    return HeldPermissionSet(frozenset(tokens))
