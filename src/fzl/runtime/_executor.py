"""Statement executor for method bodies.

Each statement yields an ``Outcome``: ``CONTINUE`` to proceed with the next
statement, or ``Returned(value)`` to stop the body.  Return is ordinary
control flow here, not an exception.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Union

from fzl.model.statements import (
    Assignment,
    ExpressionStatement,
    ReturnStatement,
    Statement,
)

from ._errors import FuzzyError
from ._evaluator import ExpressionEvaluator


class _Continue(Enum):
    """Proceed with the next statement."""

    CONTINUE = "continue"


CONTINUE = _Continue.CONTINUE


@dataclass(frozen=True)
class Returned:
    """The body executed a return; *value* is the method's result."""

    value: float


Outcome = Union[_Continue, Returned]


class StatementExecutor:
    """Executes straight-line statement lists against a call-local table.

    Method bodies have no active gate: names not bound locally resolve
    against the global table.
    """

    def __init__(self, evaluator: ExpressionEvaluator) -> None:
        self.evaluator = evaluator

    def execute_body(self, stmts: list[Statement], local_vars: dict[str, float]) -> Outcome:
        for stmt in stmts:
            outcome = self.execute(stmt, local_vars)
            if isinstance(outcome, Returned):
                return outcome
        return CONTINUE

    def execute(self, stmt: Statement, local_vars: dict[str, float]) -> Outcome:
        handler = self._STMT_DISPATCH.get(stmt.kind)
        if handler is None:
            raise FuzzyError(f"Unsupported statement kind: {stmt.kind}")
        return handler(self, stmt, local_vars)

    def _exec_assignment(self, stmt: Assignment, local_vars: dict[str, float]) -> Outcome:
        local_vars[stmt.variable] = self.evaluator.eval(stmt.value, local_vars, "")
        return CONTINUE

    def _exec_return(self, stmt: ReturnStatement, local_vars: dict[str, float]) -> Outcome:
        return Returned(self.evaluator.eval(stmt.value, local_vars, ""))

    def _exec_expression(self, stmt: ExpressionStatement, local_vars: dict[str, float]) -> Outcome:
        self.evaluator.eval(stmt.value, local_vars, "")
        return CONTINUE

    # Statement dispatch table
    _STMT_DISPATCH: dict[str, Callable[..., Outcome]] = {
        "assignment": _exec_assignment,
        "return": _exec_return,
        "expression": _exec_expression,
    }
