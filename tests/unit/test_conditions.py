"""Tests for built-in conditions and ConditionRegistry."""
from __future__ import annotations

import logging

import pytest

from access_policy.conditions import ConditionRegistry, has_actor
from access_policy.decision.held import HeldPermissionSet


class TestHasActor:
    def test_true_with_actor(self) -> None:
        assert has_actor({"actor": HeldPermissionSet()}) is True

    def test_false_without_actor(self) -> None:
        assert has_actor({"actor": None}) is False
        assert has_actor({}) is False


class TestConditionRegistry:
    def test_builtins(self) -> None:
        registry = ConditionRegistry.with_builtins()
        assert registry.names == ["has_actor"]
        assert registry.get("has_actor") is has_actor

    def test_register_and_get(self) -> None:
        registry = ConditionRegistry()
        registry.register("always", lambda ctx: True)
        assert "always" in registry
        assert registry.get("always")({}) is True

    def test_unknown_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="Unknown condition"):
            ConditionRegistry.with_builtins().get("is_owner")

    def test_replacing_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = ConditionRegistry.with_builtins()
        with caplog.at_level(logging.WARNING, logger="access_policy.conditions"):
            registry.register("has_actor", lambda ctx: False)
        assert "Replacing" in caplog.text
