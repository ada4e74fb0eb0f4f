"""Tests for PolicyTable accumulation and inheritance."""
from __future__ import annotations

import pytest

from access_policy.rules.policy import PermissionPolicy
from access_policy.rules.rule import RuleKind
from access_policy.rules.table import PolicyTable

_ACTIONS = ["action_a", "action_b", "action_c", "action_d"]


@pytest.fixture()
def liberal() -> PolicyTable:
    table = PolicyTable()
    table.permit("superpowers", "administrator")
    return table


# ---------------------------------------------------------------------------
# Accumulation
# ---------------------------------------------------------------------------

class TestGetOrCreatePolicy:
    def test_creates_empty_policy(self) -> None:
        table = PolicyTable()
        policy = table.get_or_create_policy("editor")
        assert isinstance(policy, PermissionPolicy)
        assert len(policy) == 0
        assert "editor" in table

    def test_returns_same_policy_on_second_lookup(self) -> None:
        table = PolicyTable()
        assert table.get_or_create_policy("editor") is table.get_or_create_policy("editor")

    def test_get_does_not_create(self) -> None:
        table = PolicyTable()
        assert table.get("editor") is None
        assert len(table) == 0

    def test_misspelled_permission_silently_denies(self) -> None:
        table = PolicyTable()
        table.get_or_create_policy("edtior")
        assert table.required_permissions("edit") == frozenset()


class TestAddRule:
    def test_fan_out_shares_rule(self) -> None:
        table = PolicyTable()
        rule = table.add_rule(["editor", "author"], RuleKind.PERMIT, to="edit")
        assert table.get("editor").rules == (rule,)  # type: ignore[union-attr]
        assert table.get("author").rules == (rule,)  # type: ignore[union-attr]

    def test_single_name_string(self) -> None:
        table = PolicyTable()
        table.add_rule("editor", "restrict", from_="destroy")
        assert table.names == ["editor"]

    def test_no_names_raises(self) -> None:
        with pytest.raises(ValueError, match="permission name"):
            PolicyTable().permit()

    def test_names_keep_first_reference_order(self) -> None:
        table = PolicyTable()
        table.permit("b")
        table.permit("a")
        table.restrict("b", from_="x")
        assert table.names == ["b", "a"]

    def test_iteration_yields_policies(self, liberal: PolicyTable) -> None:
        assert [policy.name for policy in liberal] == ["superpowers", "administrator"]


# ---------------------------------------------------------------------------
# Inheritance
# ---------------------------------------------------------------------------

class TestDeriveChild:
    def test_child_starts_with_parent_rules(self, liberal: PolicyTable) -> None:
        child = liberal.derive_child()
        assert child.required_permissions("action_a") == {"superpowers", "administrator"}

    def test_child_restrict_does_not_affect_parent(self, liberal: PolicyTable) -> None:
        before = {a: liberal.required_permissions(a) for a in _ACTIONS}
        child = liberal.derive_child()
        child.restrict("administrator", to=["action_c", "action_d"])
        child.permit("newcomer")
        after = {a: liberal.required_permissions(a) for a in _ACTIONS}
        assert before == after
        assert "newcomer" not in liberal

    def test_siblings_are_independent(self, liberal: PolicyTable) -> None:
        left = liberal.derive_child()
        right = liberal.derive_child()
        left.restrict("administrator")
        assert right.required_permissions("action_a") == {"superpowers", "administrator"}
        assert left.required_permissions("action_a") == {"superpowers"}

    def test_grandchild_accumulates(self, liberal: PolicyTable) -> None:
        child = liberal.derive_child()
        child.restrict("administrator", from_="action_c")
        grandchild = child.derive_child()
        grandchild.restrict("superpowers", from_="action_c")
        assert grandchild.required_permissions("action_c") == frozenset()
        assert child.required_permissions("action_c") == {"superpowers"}

    def test_parent_changes_after_derive_do_not_leak(self, liberal: PolicyTable) -> None:
        child = liberal.derive_child()
        liberal.restrict("superpowers")
        assert "superpowers" in child.required_permissions("action_a")


# ---------------------------------------------------------------------------
# required_permissions
# ---------------------------------------------------------------------------

class TestRequiredPermissions:
    def test_restrict_to_scenario(self, liberal: PolicyTable) -> None:
        child = liberal.derive_child()
        child.restrict("administrator", to=["action_c", "action_d"])
        assert child.required_permissions("action_a") == {"superpowers"}
        assert child.required_permissions("action_c") == {"superpowers", "administrator"}

    def test_context_passed_to_conditions(self) -> None:
        table = PolicyTable()
        table.permit("everyone", condition=lambda ctx: ctx.get("actor") is not None)
        assert table.required_permissions("action_a", {"actor": "x"}) == {"everyone"}
        assert table.required_permissions("action_a") == frozenset()

    def test_repr(self, liberal: PolicyTable) -> None:
        assert repr(liberal) == "PolicyTable(permissions=['superpowers', 'administrator'])"
