"""Gate system: at most one expression per gate, evaluated on demand."""

from __future__ import annotations

import logging

from fzl.model.expressions import Expression
from fzl.model.gates import GLOBAL_GATE_NAME

from ._errors import NoExpressionAssigned, VariableNotFound
from ._evaluator import ExpressionEvaluator
from ._scope import ScopeManager

logger = logging.getLogger(__name__)


class GateSystem:
    """Maps gate name -> assigned expression.

    Assigning never evaluates; the last assignment wins.  The expression
    registry is separate from the variable tables held by ``ScopeManager``
    and is therefore untouched by anonymous-scope restores.
    """

    def __init__(
        self,
        scopes: ScopeManager,
        evaluator: ExpressionEvaluator,
        global_gate: str = GLOBAL_GATE_NAME,
    ) -> None:
        self.scopes = scopes
        self.evaluator = evaluator
        self.global_gate = global_gate
        self.expressions: dict[str, Expression] = {}

    def assign_expression(self, gate_name: str, expr: Expression) -> None:
        logger.debug("Assigning %s expression to gate '%s'", expr.kind, gate_name)
        self.expressions[gate_name] = expr

    def expression(self, gate_name: str) -> Expression | None:
        return self.expressions.get(gate_name)

    def evaluate(self, gate_name: str) -> float:
        """Evaluate the gate's expression against the gate's own table."""
        expr = self.expressions.get(gate_name)
        if expr is None:
            raise NoExpressionAssigned(gate_name)
        local = self.scopes.gate_table(gate_name) or {}
        result = self.evaluator.eval(expr, local, gate_name)
        logger.debug("Gate '%s' evaluated to %s", gate_name, result)
        return result

    def test_variable(self, gate_name: str, var_name: str) -> float:
        """Read *var_name* as seen from *gate_name*, falling back to global.

        The reserved global gate name always reads the global table.
        """
        if gate_name != self.global_gate:
            table = self.scopes.gate_table(gate_name)
            if table is not None and var_name in table:
                return table[var_name]
        if var_name in self.scopes.global_vars:
            return self.scopes.global_vars[var_name]
        raise VariableNotFound(var_name, gate_name)

    def clear(self) -> None:
        self.expressions.clear()
