"""In-memory permission set store and actor provisioning.

Example
-------
::

    store = PermissionSetStore()
    store.add(PermissionSetRecord("admin", ["administrator"]))
    roles = store.new_in_roles("alice", "admin")
    roles.held_permissions()   # HeldPermissionSet({"administrator"})
    store.new_in_roles("bob", "missing")   # raises PermissionSetNotFoundError
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from access_policy.roles.records import (
    ActorRoles,
    PermissionSetRecord,
    RoleRecord,
    flatten_names,
)

logger = logging.getLogger(__name__)


class PermissionSetNotFoundError(LookupError):
    """Raised when provisioning names a permission set that does not exist.

    Attributes
    ----------
    name:
        The missing permission set name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No permission set found having name {name}")


class PermissionSetStore:
    """Permission set records keyed by name."""

    def __init__(self, records: list[PermissionSetRecord] | None = None) -> None:
        self._records: dict[str, PermissionSetRecord] = {}
        for record in records or []:
            self.add(record)

    def add(self, record: PermissionSetRecord) -> None:
        """Add a record.

        Raises
        ------
        ValueError
            If a record with the same name already exists.
        """
        if record.name in self._records:
            raise ValueError(f"Duplicate permission set name {record.name!r}.")
        self._records[record.name] = record

    def find_by_name(self, name: str) -> PermissionSetRecord | None:
        return self._records.get(str(name))

    def require(self, name: str) -> PermissionSetRecord:
        """Return the named record or raise :class:`PermissionSetNotFoundError`."""
        record = self.find_by_name(name)
        if record is None:
            raise PermissionSetNotFoundError(str(name))
        return record

    def new_in_roles(self, actor_id: str, *set_names: object) -> ActorRoles:
        """Build an actor's roles from permission set names.

        Names may be nested lists; ``None`` entries are skipped.  The first
        unknown name aborts provisioning.
        """
        actor_roles = ActorRoles(actor_id)
        for name in flatten_names(set_names):
            actor_roles.roles.append(RoleRecord(actor_id, self.require(name)))
        logger.info(
            "Provisioned actor %s in roles %s", actor_id, actor_roles.role_names
        )
        return actor_roles

    @property
    def names(self) -> list[str]:
        return list(self._records)

    def __iter__(self) -> Iterator[PermissionSetRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records
