"""Class, method and instance definitions.

A ``ClassDef`` is built once (see ``fzl.runtime.ClassBuilder``) and then
shared by every ``Instance`` created from it.  Instances never copy method
or variable declarations; they only get a fresh variable table seeded from
the declared defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from .statements import Statement


class FuzzyType(str, Enum):
    """The only supported numeric kind: a bounded-real fuzzy double."""

    DOUBLE = "double"


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    param_type: FuzzyType = FuzzyType.DOUBLE


class MethodDef(BaseModel):
    """A named method: ordered parameters and a straight-line body."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameters: list[Parameter] = []
    body: list[Statement] = []


class ClassDef(BaseModel):
    """A finished class definition.

    *variables* maps each declared name to its default.  *parent* is the
    single superclass, if any.  *nested_classes* holds classes defined
    while this one was the open definition context.  The three tables are
    read-only views.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    name: str
    variables: Mapping[str, float] = {}
    methods: Mapping[str, MethodDef] = {}
    parent: ClassDef | None = None
    nested_classes: Mapping[str, ClassDef] = {}

    @field_validator("variables", "methods", "nested_classes", mode="after")
    @classmethod
    def _read_only(cls, table: Mapping) -> Mapping:
        return MappingProxyType(dict(table))

    @field_serializer("variables", "methods", "nested_classes")
    def _plain(self, table: Mapping) -> dict:
        return dict(table)

    def lineage(self) -> list[ClassDef]:
        """Return the inheritance chain, most-distant ancestor first."""
        chain: list[ClassDef] = []
        current: ClassDef | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    def find_method(self, name: str) -> tuple[ClassDef, MethodDef] | None:
        """Find *name* walking upward from this class.

        Returns the declaring class and its method, or None.  The
        most-derived definition wins.
        """
        current: ClassDef | None = self
        while current is not None:
            method = current.methods.get(name)
            if method is not None:
                return current, method
            current = current.parent
        return None


class Instance(BaseModel):
    """A runtime object: a shared class definition plus its own variables.

    *variables* is public for setup and inspection, and is mutated by
    method invocation.
    """

    class_def: ClassDef
    variables: dict[str, float] = {}


ClassDef.model_rebuild()
Instance.model_rebuild()
