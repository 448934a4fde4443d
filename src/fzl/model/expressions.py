"""Expression AST nodes for fuzzy-logic computation."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FuzzyOp(str, Enum):
    ADD = "ADD"
    MULT = "MULT"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"


class ValueExpr(BaseModel):
    """A constant fuzzy value (conventionally in [0, 1])."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["value"] = "value"
    value: float


class VariableExpr(BaseModel):
    """Reference to a variable by name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    name: str


class BinaryExpr(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    op: FuzzyOp
    left: Expression
    right: Expression


class ComplementExpr(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["complement"] = "complement"
    operand: Expression


class AlphaCutExpr(BaseModel):
    """Keep *operand* only where it reaches the *alpha* threshold."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["alpha_cut"] = "alpha_cut"
    operand: Expression
    alpha: float


Expression = Annotated[
    Union[
        ValueExpr,
        VariableExpr,
        BinaryExpr,
        ComplementExpr,
        AlphaCutExpr,
    ],
    Field(discriminator="kind"),
]

# Rebuild models with recursive Expression references.
BinaryExpr.model_rebuild()
ComplementExpr.model_rebuild()
AlphaCutExpr.model_rebuild()
