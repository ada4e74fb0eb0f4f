"""YAML policy document loader.

PolicyLoader validates a policy document against
:class:`~access_policy.config.schema.PolicyDocument` and builds the
declared :class:`~access_policy.scope.PolicyScope` objects and the
:class:`~access_policy.roles.store.PermissionSetStore`.

Scopes are built in document order.  A scope's ``parent`` must name a
scope declared earlier in the same document; the child starts from a copy
of the parent's rules.

Example
-------
::

    loader = PolicyLoader()
    policies = loader.load("policies.yaml")
    scope = policies.scope("restricted")
    held = policies.permission_sets.new_in_roles("alice", "admin").held_permissions()
    scope.decide("publish", held).allowed
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from access_policy.conditions import ConditionRegistry
from access_policy.config.schema import PolicyDocument, RuleSpec
from access_policy.roles.records import PermissionSetRecord
from access_policy.roles.store import PermissionSetStore
from access_policy.scope import PolicyScope

logger = logging.getLogger(__name__)


class PolicyConfigError(ValueError):
    """Raised when a policy document is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the document that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


@dataclass
class LoadedPolicies:
    """Scopes and permission sets built from one policy document."""

    scopes: dict[str, PolicyScope] = field(default_factory=dict)
    permission_sets: PermissionSetStore = field(default_factory=PermissionSetStore)

    def scope(self, name: str) -> PolicyScope:
        """Return the named scope.

        Raises
        ------
        KeyError
            If the document declares no such scope.
        """
        try:
            return self.scopes[name]
        except KeyError:
            raise KeyError(
                f"Unknown scope {name!r}. Declared: {list(self.scopes)}"
            ) from None


class PolicyLoader:
    """Loads policy documents from YAML files, strings, or dicts.

    Parameters
    ----------
    conditions:
        Registry used to resolve ``condition`` names.  Defaults to the
        built-in conditions (``has_actor``).
    """

    def __init__(self, conditions: ConditionRegistry | None = None) -> None:
        self._conditions = conditions if conditions is not None else ConditionRegistry.with_builtins()

    def load(self, config_path: str | Path) -> LoadedPolicies:
        """Load a policy document from disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        PolicyConfigError
            If the file cannot be parsed or is invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Policy document not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw: object = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build(raw, config_path=str(config_path))

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> LoadedPolicies:
        try:
            raw: object = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build(raw, config_path=config_path)

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> LoadedPolicies:
        return self._build(config, config_path=config_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build(self, raw: object, config_path: str | None = None) -> LoadedPolicies:
        if not isinstance(raw, dict):
            raise PolicyConfigError(
                "Policy document must be a YAML mapping (dict).", config_path
            )
        try:
            document = PolicyDocument.model_validate(raw)
        except ValidationError as exc:
            raise PolicyConfigError(str(exc), config_path) from exc

        loaded = LoadedPolicies()
        for scope_spec in document.scopes:
            if scope_spec.name in loaded.scopes:
                raise PolicyConfigError(
                    f"Duplicate scope name {scope_spec.name!r}.", config_path
                )
            if scope_spec.parent is None:
                scope = PolicyScope(scope_spec.name)
            elif scope_spec.parent in loaded.scopes:
                scope = loaded.scopes[scope_spec.parent].derive(scope_spec.name)
            else:
                raise PolicyConfigError(
                    f"Scope {scope_spec.name!r} names parent {scope_spec.parent!r}, "
                    "which is not declared before it.",
                    config_path,
                )
            for index, rule_spec in enumerate(scope_spec.rules):
                self._add_rule(scope, rule_spec, index, config_path)
            loaded.scopes[scope.name] = scope

        for set_spec in document.permission_sets:
            try:
                loaded.permission_sets.add(
                    PermissionSetRecord(set_spec.name, list(set_spec.permissions))
                )
            except ValueError as exc:
                raise PolicyConfigError(str(exc), config_path) from exc

        logger.info(
            "Loaded %d scopes and %d permission sets from %s",
            len(loaded.scopes),
            len(loaded.permission_sets),
            config_path or "<dict>",
        )
        return loaded

    def _add_rule(
        self,
        scope: PolicyScope,
        rule_spec: RuleSpec,
        index: int,
        config_path: str | None,
    ) -> None:
        condition = None
        if rule_spec.condition is not None:
            try:
                condition = self._conditions.get(rule_spec.condition)
            except KeyError as exc:
                raise PolicyConfigError(
                    f"Error in scope {scope.name!r} rule {index}: {exc.args[0]}",
                    config_path,
                ) from exc

        add = scope.permit if rule_spec.kind == "permit" else scope.restrict
        add(
            *rule_spec.permissions,
            to=rule_spec.to,
            from_=rule_spec.from_,
            condition=condition,
        )
