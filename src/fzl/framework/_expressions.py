"""Expression, statement and parameter constructors.

Operands may be given as plain numbers; they are wrapped in ``ValueExpr``.
"""

from __future__ import annotations

from typing import Union

from fzl.model.classes import FuzzyType, Parameter
from fzl.model.expressions import (
    AlphaCutExpr,
    BinaryExpr,
    ComplementExpr,
    Expression,
    FuzzyOp,
    ValueExpr,
    VariableExpr,
)
from fzl.model.gates import GLOBAL_GATE_NAME, Gate
from fzl.model.statements import Assignment, ExpressionStatement, ReturnStatement

Operand = Union[Expression, float, int]


def _to_expr(operand: Operand) -> Expression:
    if isinstance(operand, (ValueExpr, VariableExpr, BinaryExpr, ComplementExpr, AlphaCutExpr)):
        return operand
    if isinstance(operand, (int, float)) and not isinstance(operand, bool):
        return ValueExpr(value=float(operand))
    raise TypeError(
        f"Expected a fuzzy expression or a number, got {type(operand).__name__}"
    )


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

def value(v: float) -> ValueExpr:
    return ValueExpr(value=v)


def var(name: str) -> VariableExpr:
    return VariableExpr(name=name)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def _binary(op: FuzzyOp, a: Operand, b: Operand) -> BinaryExpr:
    return BinaryExpr(op=op, left=_to_expr(a), right=_to_expr(b))


def ADD(a: Operand, b: Operand) -> BinaryExpr:
    """Bounded sum: ``min(1.0, a + b)``."""
    return _binary(FuzzyOp.ADD, a, b)


def MULT(a: Operand, b: Operand) -> BinaryExpr:
    return _binary(FuzzyOp.MULT, a, b)


def AND(a: Operand, b: Operand) -> BinaryExpr:
    """Fuzzy AND: ``min(a, b)``."""
    return _binary(FuzzyOp.AND, a, b)


def OR(a: Operand, b: Operand) -> BinaryExpr:
    """Fuzzy OR: ``max(a, b)``."""
    return _binary(FuzzyOp.OR, a, b)


def XOR(a: Operand, b: Operand) -> BinaryExpr:
    """Fuzzy XOR: ``|a - b|``."""
    return _binary(FuzzyOp.XOR, a, b)


def COMPLEMENT(a: Operand) -> ComplementExpr:
    return ComplementExpr(operand=_to_expr(a))


def ALPHA_CUT(a: Operand, alpha: float) -> AlphaCutExpr:
    """``a`` where ``a >= alpha``, else ``0.0``."""
    return AlphaCutExpr(operand=_to_expr(a), alpha=alpha)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

def assign(name: str, expr: Operand) -> Assignment:
    return Assignment(variable=name, value=_to_expr(expr))


def return_(expr: Operand) -> ReturnStatement:
    return ReturnStatement(value=_to_expr(expr))


def expr_stmt(expr: Operand) -> ExpressionStatement:
    return ExpressionStatement(value=_to_expr(expr))


# ---------------------------------------------------------------------------
# Parameters and gates
# ---------------------------------------------------------------------------

def param(name: str, param_type: str | FuzzyType = FuzzyType.DOUBLE) -> Parameter:
    return Parameter(name=name, param_type=param_type)


def gate(name: str) -> Gate:
    return Gate(name=name)


GLOBAL = Gate(name=GLOBAL_GATE_NAME)
