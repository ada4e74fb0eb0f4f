"""Policy document schema: Pydantic v2 models.

Example
-------
::

    version: "1"
    scopes:
      - name: base
        rules:
          - permit: [superpowers, administrator]
      - name: restricted
        parent: base
        rules:
          - restrict: administrator
            to: [publish, archive]
          - permit: everyone
            to: index
            condition: has_actor
    permission_sets:
      - name: admin
        permissions: [administrator]
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


def _as_name_list(value: object) -> object:
    if isinstance(value, str):
        return [value]
    return value


class RuleSpec(BaseModel):
    """One ``permit`` or ``restrict`` declaration."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    permit: list[str] | None = Field(default=None)
    restrict: list[str] | None = Field(default=None)
    to: str | list[str] | None = Field(default=None)
    from_: str | list[str] | None = Field(default=None, alias="from")
    condition: str | None = Field(default=None)

    @field_validator("permit", "restrict", mode="before")
    @classmethod
    def coerce_names(cls, value: object) -> object:
        return _as_name_list(value)

    @model_validator(mode="after")
    def exactly_one_kind(self) -> RuleSpec:
        if (self.permit is None) == (self.restrict is None):
            raise ValueError("A rule needs exactly one of 'permit' or 'restrict'.")
        names = self.permit if self.permit is not None else self.restrict
        if not names:
            raise ValueError("A rule must name at least one permission.")
        return self

    @property
    def kind(self) -> str:
        return "permit" if self.permit is not None else "restrict"

    @property
    def permissions(self) -> list[str]:
        return list(self.permit if self.permit is not None else self.restrict or [])


class ScopeSpec(BaseModel):
    """A named scope, optionally derived from an earlier scope."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    parent: str | None = Field(default=None)
    rules: list[RuleSpec] = Field(default_factory=list)


class PermissionSetSpec(BaseModel):
    """A named list of permission tokens."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    permissions: list[str] = Field(default_factory=list)


class PolicyDocument(BaseModel):
    """Top-level policy document.

    Unknown top-level keys are allowed so documents can carry metadata.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    description: str | None = Field(default=None)
    scopes: list[ScopeSpec] = Field(default_factory=list)
    permission_sets: list[PermissionSetSpec] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported policy document version {version!r}. "
                f"Supported: {sorted(SUPPORTED_VERSIONS)}"
            )
        return version
