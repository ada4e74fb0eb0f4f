"""The actor side of an authorization check."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

SUPERUSER: str = "superuser"
"""Reserved permission name that authorizes any requirement."""


@dataclass(frozen=True)
class HeldPermissionSet:
    """Read-only snapshot of the permission names an actor holds.

    Attributes
    ----------
    permissions:
        Held permission names.  Order is irrelevant.
    """

    permissions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *names: str) -> HeldPermissionSet:
        """Build a set from positional permission names."""
        return cls(frozenset(str(name) for name in names))

    @classmethod
    def from_iterable(cls, names: Iterable[object]) -> HeldPermissionSet:
        return cls(frozenset(str(name) for name in names if name is not None))

    @property
    def is_superuser(self) -> bool:
        return SUPERUSER in self.permissions

    def authorizes(self, required: Iterable[str]) -> bool:
        """Return True if holding these permissions satisfies ``required``.

        A superuser is authorized for anything, including an empty
        requirement.  Otherwise at least one required name must be held;
        an empty requirement is never satisfied.
        """
        if self.is_superuser:
            return True
        required_set = frozenset(required)
        if not required_set:
            return False
        return not required_set.isdisjoint(self.permissions)

    def union(self, other: HeldPermissionSet) -> HeldPermissionSet:
        return HeldPermissionSet(self.permissions | other.permissions)

    def __contains__(self, name: object) -> bool:
        return name in self.permissions

    def __len__(self) -> int:
        return len(self.permissions)

    def __str__(self) -> str:
        return "{" + ", ".join(sorted(self.permissions)) + "}"
