"""Tests for the expression evaluator."""

import pytest

from fzl.framework import (
    ADD,
    ALPHA_CUT,
    AND,
    COMPLEMENT,
    MULT,
    OR,
    XOR,
    value,
    var,
)
from fzl.model.expressions import AlphaCutExpr, ValueExpr
from fzl.runtime import (
    ExpressionEvaluator,
    ScopeManager,
    UnresolvedVariable,
    VariableNotFound,
)


@pytest.fixture
def scopes():
    return ScopeManager()


@pytest.fixture
def ev(scopes):
    return ExpressionEvaluator(scopes)


# ---------------------------------------------------------------------------
# Fuzzy operations
# ---------------------------------------------------------------------------

class TestOperations:
    def test_value(self, ev):
        assert ev.eval(value(0.42)) == 0.42

    def test_add_below_one(self, ev):
        assert ev.eval(ADD(value(0.2), value(0.3))) == pytest.approx(0.5)

    def test_add_clamped(self, ev):
        assert ev.eval(ADD(value(0.7), value(0.5))) == 1.0

    def test_add_exactly_one(self, ev):
        assert ev.eval(ADD(value(0.5), value(0.5))) == 1.0

    @pytest.mark.parametrize("a,b", [(0.0, 0.0), (0.3, 0.6), (0.9, 0.9), (1.0, 1.0)])
    def test_add_is_bounded_sum(self, ev, a, b):
        assert ev.eval(ADD(a, b)) == pytest.approx(min(1.0, a + b))

    def test_add_not_clamped_below_zero(self, ev):
        assert ev.eval(ADD(value(-0.5), value(0.2))) == pytest.approx(-0.3)

    def test_mult(self, ev):
        assert ev.eval(MULT(value(0.5), value(0.4))) == pytest.approx(0.2)

    def test_mult_unbounded(self, ev):
        assert ev.eval(MULT(value(0.3), value(2.0))) == pytest.approx(0.6)
        assert ev.eval(MULT(value(2.0), value(3.0))) == pytest.approx(6.0)

    def test_complement(self, ev):
        assert ev.eval(COMPLEMENT(value(0.25))) == pytest.approx(0.75)

    def test_and_is_min(self, ev):
        assert ev.eval(AND(value(0.3), value(0.8))) == 0.3

    def test_or_is_max(self, ev):
        assert ev.eval(OR(value(0.3), value(0.8))) == 0.8

    def test_xor_is_abs_difference(self, ev):
        assert ev.eval(XOR(value(0.3), value(0.8))) == pytest.approx(0.5)
        assert ev.eval(XOR(value(0.8), value(0.3))) == pytest.approx(0.5)

    def test_nested_tree(self, ev):
        # (0.9 * 0.2) + 0.3
        expr = ADD(MULT(value(0.9), value(0.2)), value(0.3))
        assert ev.eval(expr) == pytest.approx(0.48)

    def test_shared_subexpression(self, ev):
        shared = MULT(value(0.5), value(0.5))
        assert ev.eval(OR(shared, COMPLEMENT(shared))) == pytest.approx(0.75)


# ---------------------------------------------------------------------------
# Alpha cut
# ---------------------------------------------------------------------------

class TestAlphaCut:
    def test_above_threshold(self, ev):
        assert ev.eval(ALPHA_CUT(value(0.7), 0.5)) == 0.7

    def test_below_threshold(self, ev):
        assert ev.eval(ALPHA_CUT(value(0.3), 0.5)) == 0.0

    def test_equal_to_threshold_keeps_value(self, ev):
        assert ev.eval(ALPHA_CUT(value(0.5), 0.5)) == 0.5

    def test_operand_evaluated_twice(self, ev, monkeypatch):
        calls = []
        original = ExpressionEvaluator._EXPR_DISPATCH["value"]

        def counting(self, expr, local, gate):
            calls.append(expr.value)
            return original(self, expr, local, gate)

        monkeypatch.setitem(ExpressionEvaluator._EXPR_DISPATCH, "value", counting)
        ev.eval(AlphaCutExpr(operand=ValueExpr(value=0.9), alpha=0.1))
        assert calls == [0.9, 0.9]

    def test_operand_evaluated_once_when_cut(self, ev, monkeypatch):
        calls = []
        original = ExpressionEvaluator._EXPR_DISPATCH["value"]

        def counting(self, expr, local, gate):
            calls.append(expr.value)
            return original(self, expr, local, gate)

        monkeypatch.setitem(ExpressionEvaluator._EXPR_DISPATCH, "value", counting)
        assert ev.eval(ALPHA_CUT(0.1, 0.9)) == 0.0
        assert calls == [0.1]


# ---------------------------------------------------------------------------
# Variable lookup
# ---------------------------------------------------------------------------

class TestVariables:
    def test_local_binding(self, ev):
        assert ev.eval(var("x"), {"x": 0.4}) == 0.4

    def test_global_fallback(self, ev, scopes):
        scopes.assign_global("x", 0.2)
        assert ev.eval(var("x")) == 0.2

    def test_gate_table(self, ev, scopes):
        scopes.assign_global("x", 0.2)
        scopes.assign_in_gate("g", "x", 0.7)
        assert ev.eval(var("x"), {}, "g") == 0.7
        assert ev.eval(var("x"), {}, "") == 0.2

    def test_local_shadows_gate(self, ev, scopes):
        scopes.assign_in_gate("g", "x", 0.7)
        assert ev.eval(var("x"), {"x": 0.1}, "g") == 0.1

    def test_gate_without_table_falls_back_to_global(self, ev, scopes):
        scopes.assign_global("x", 0.2)
        assert ev.eval(var("x"), {}, "missing") == 0.2

    def test_unresolved(self, ev):
        with pytest.raises(VariableNotFound) as exc_info:
            ev.eval(ADD(var("nope"), value(0.1)))
        assert exc_info.value.name == "nope"

    def test_unresolved_alias(self):
        assert UnresolvedVariable is VariableNotFound

    def test_eval_does_not_mutate_bindings(self, ev, scopes):
        scopes.assign_global("y", 0.3)
        local = {"x": 0.4}
        ev.eval(ADD(var("x"), var("y")), local, "g")
        assert local == {"x": 0.4}
        assert scopes.global_vars == {"y": 0.3}
        assert scopes.gate_vars == {}
