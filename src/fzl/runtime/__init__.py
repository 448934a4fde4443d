"""fzl runtime — evaluation core for the fuzzy-logic expression language.

Entry point::

    from fzl.framework import ADD, var, value
    from fzl.runtime import create_interpreter

    interp = create_interpreter()
    with interp.scope("g") as g:
        interp.assign(var("A"), value(0.5), gate=g)
        interp.assign(var("B"), value(0.7), gate=g)
    interp.assign_expression("g", ADD(var("A"), var("B")))
    interp.evaluate_gate("g")   # 1.0 (clamped)
"""

from __future__ import annotations

from typing import Any

from ._classes import ClassBuilder, ClassRegistry
from ._errors import (
    ClassNotFound,
    FuzzyError,
    InvalidAssignmentTarget,
    InvalidDeclaration,
    MethodNotFound,
    MissingArgument,
    NoExpressionAssigned,
    UnresolvedVariable,
    VariableNotFound,
)
from ._evaluator import ExpressionEvaluator
from ._executor import CONTINUE, Outcome, Returned, StatementExecutor
from ._gates import GateSystem
from ._interpreter import GateScope, Interpreter, InterpreterConfig
from ._scope import EnvState, ScopeManager


def create_interpreter(**settings: Any) -> Interpreter:
    """Create an interpreter with fresh, empty state.

    Parameters
    ----------
    **settings
        Fields of ``InterpreterConfig`` (``global_gate``, ``default_value``).

    Returns
    -------
    Interpreter
        The interpreter owning all variable, gate and class tables.
    """
    return Interpreter(InterpreterConfig(**settings))


__all__ = [
    "create_interpreter",
    "Interpreter",
    "InterpreterConfig",
    "GateScope",
    "ClassBuilder",
    "ClassRegistry",
    "EnvState",
    "ExpressionEvaluator",
    "GateSystem",
    "ScopeManager",
    "StatementExecutor",
    "Outcome",
    "Returned",
    "CONTINUE",
    "FuzzyError",
    "VariableNotFound",
    "UnresolvedVariable",
    "NoExpressionAssigned",
    "MissingArgument",
    "MethodNotFound",
    "ClassNotFound",
    "InvalidDeclaration",
    "InvalidAssignmentTarget",
]
