"""Expression evaluator: tree-walking interpreter for fuzzy expressions.

Evaluation is pure.  It reads the call-local bindings, the active gate's
table and the global table (in that order) and never writes to any of them.
Shared sub-expressions are re-evaluated on every visit.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from fzl.model.expressions import (
    AlphaCutExpr,
    BinaryExpr,
    ComplementExpr,
    Expression,
    FuzzyOp,
    ValueExpr,
    VariableExpr,
)

from ._errors import FuzzyError
from ._scope import ScopeManager


_BINOPS: dict[FuzzyOp, Callable[[float, float], float]] = {
    FuzzyOp.ADD: lambda a, b: min(1.0, a + b),
    FuzzyOp.MULT: lambda a, b: a * b,
    FuzzyOp.AND: min,
    FuzzyOp.OR: max,
    FuzzyOp.XOR: lambda a, b: abs(a - b),
}


class ExpressionEvaluator:
    """Evaluates expression trees against a ``ScopeManager``.

    Parameters
    ----------
    scopes : ScopeManager
        Supplies the gate and global tables consulted when a name is not
        bound locally.
    """

    def __init__(self, scopes: ScopeManager) -> None:
        self.scopes = scopes

    def eval(
        self,
        expr: Expression,
        local_bindings: Mapping[str, float] | None = None,
        active_gate: str = "",
    ) -> float:
        handler = self._EXPR_DISPATCH.get(expr.kind)
        if handler is None:
            raise FuzzyError(f"Unsupported expression kind: {expr.kind}")
        return handler(self, expr, local_bindings or {}, active_gate)

    def _eval_value(self, expr: ValueExpr, local, gate) -> float:
        return expr.value

    def _eval_variable(self, expr: VariableExpr, local, gate) -> float:
        return self.scopes.lookup(expr.name, local, gate)

    def _eval_binary(self, expr: BinaryExpr, local, gate) -> float:
        left = self.eval(expr.left, local, gate)
        right = self.eval(expr.right, local, gate)
        return _BINOPS[expr.op](left, right)

    def _eval_complement(self, expr: ComplementExpr, local, gate) -> float:
        return 1.0 - self.eval(expr.operand, local, gate)

    def _eval_alpha_cut(self, expr: AlphaCutExpr, local, gate) -> float:
        # The operand is evaluated again for the result.
        if self.eval(expr.operand, local, gate) >= expr.alpha:
            return self.eval(expr.operand, local, gate)
        return 0.0

    _EXPR_DISPATCH: dict[str, Callable[..., float]] = {
        "value": _eval_value,
        "variable": _eval_variable,
        "binary": _eval_binary,
        "complement": _eval_complement,
        "alpha_cut": _eval_alpha_cut,
    }
