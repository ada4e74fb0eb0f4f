"""Tests for HeldPermissionSet."""
from __future__ import annotations

import pytest

from access_policy.decision.held import SUPERUSER, HeldPermissionSet


class TestConstruction:
    def test_of(self) -> None:
        held = HeldPermissionSet.of("administrator", "editor")
        assert held.permissions == frozenset({"administrator", "editor"})

    def test_from_iterable_skips_none(self) -> None:
        held = HeldPermissionSet.from_iterable(["editor", None])
        assert held.permissions == frozenset({"editor"})

    def test_default_is_empty(self) -> None:
        assert len(HeldPermissionSet()) == 0

    def test_frozen(self) -> None:
        held = HeldPermissionSet.of("editor")
        with pytest.raises((AttributeError, TypeError)):
            held.permissions = frozenset()  # type: ignore[misc]

    def test_union(self) -> None:
        held = HeldPermissionSet.of("a").union(HeldPermissionSet.of("b"))
        assert "a" in held and "b" in held

    def test_str_sorted(self) -> None:
        assert str(HeldPermissionSet.of("b", "a")) == "{a, b}"


class TestAuthorizes:
    def test_superuser_authorizes_anything(self) -> None:
        held = HeldPermissionSet.of(SUPERUSER)
        assert held.is_superuser is True
        assert held.authorizes({"any_action_at_all"}) is True

    def test_superuser_authorizes_empty_requirement(self) -> None:
        assert HeldPermissionSet.of(SUPERUSER).authorizes(set()) is True

    def test_matching_permission(self) -> None:
        assert HeldPermissionSet.of("administrator").authorizes({"administrator"}) is True

    def test_one_of_many_is_enough(self) -> None:
        held = HeldPermissionSet.of("administrator")
        assert held.authorizes(["administrator", "any_thing_at_all"]) is True

    def test_no_overlap(self) -> None:
        held = HeldPermissionSet.of("administrator")
        assert held.authorizes({"super_management", "any_thing_at_all"}) is False

    def test_empty_requirement_denies(self) -> None:
        assert HeldPermissionSet.of("administrator").authorizes(set()) is False
