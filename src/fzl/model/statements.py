"""Statement AST nodes for method bodies.

Method bodies are straight-line: there are no loops or branches, only
assignments, bare expressions and an optional early return.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .expressions import Expression


class Assignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["assignment"] = "assignment"
    variable: str
    value: Expression


class ReturnStatement(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["return"] = "return"
    value: Expression


class ExpressionStatement(BaseModel):
    """Evaluate an expression as a statement (discarding its value)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["expression"] = "expression"
    value: Expression


Statement = Annotated[
    Union[
        Assignment,
        ReturnStatement,
        ExpressionStatement,
    ],
    Field(discriminator="kind"),
]

Assignment.model_rebuild()
ReturnStatement.model_rebuild()
ExpressionStatement.model_rebuild()
