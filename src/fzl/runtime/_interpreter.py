"""The interpreter: the single state object owning every runtime table.

One ``Interpreter`` holds the global and gate variable tables, the gate
expression registry, the class registry and the open-class stack.  There
are no module-level singletons; independent interpreters never share state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict

from fzl.model.classes import ClassDef, FuzzyType, Instance, MethodDef, Parameter
from fzl.model.expressions import Expression, VariableExpr
from fzl.model.gates import GLOBAL_GATE_NAME, Gate
from fzl.model.statements import Statement

from ._classes import ClassBuilder, ClassRegistry
from ._errors import InvalidAssignmentTarget
from ._evaluator import ExpressionEvaluator
from ._executor import StatementExecutor
from ._gates import GateSystem
from ._scope import EnvState, ScopeManager

logger = logging.getLogger(__name__)


class InterpreterConfig(BaseModel):
    """Interpreter settings.

    Attributes
    ----------
    global_gate : str
        Reserved gate name that denotes the global table.
    default_value : float
        Default for declared class variables, and the result of a method
        that executes no return.
    """

    model_config = ConfigDict(frozen=True)

    global_gate: str = GLOBAL_GATE_NAME
    default_value: float = 0.0


class GateScope:
    """The interpreter bound to one active gate, yielded by
    ``Interpreter.scope``.

    Every call passes the gate through to the interpreter, so default
    assignment, lookup and evaluation resolve against that gate.
    """

    def __init__(self, interpreter: Interpreter, gate: Gate) -> None:
        self.interpreter = interpreter
        self.gate = gate

    @property
    def name(self) -> str:
        return self.gate.name

    def assign(self, target: object, expr: Expression) -> None:
        self.interpreter.assign(target, expr, gate=self.gate)

    def lookup(self, name: str, local_bindings: Mapping[str, float] | None = None) -> float:
        return self.interpreter.lookup(name, local_bindings, self.gate)

    def evaluate(self, expr: Expression, local_bindings: Mapping[str, float] | None = None) -> float:
        return self.interpreter.evaluate(expr, local_bindings, self.gate)

    def test_gate(self, var_name: str) -> float:
        return self.interpreter.test_gate(self.gate, var_name)

    def assign_expression(self, expr: Expression) -> None:
        self.interpreter.assign_expression(self.gate, expr)

    def evaluate_gate(self) -> float:
        return self.interpreter.evaluate_gate(self.gate)


class Interpreter:
    """User-facing entry point for building classes and evaluating gates.

    Parameters
    ----------
    config : InterpreterConfig, optional
        Settings; defaults are used when omitted.
    """

    def __init__(self, config: InterpreterConfig | None = None) -> None:
        self.config = config or InterpreterConfig()
        self.scopes = ScopeManager()
        self.evaluator = ExpressionEvaluator(self.scopes)
        self.gates = GateSystem(self.scopes, self.evaluator, self.config.global_gate)
        self.executor = StatementExecutor(self.evaluator)
        self.registry = ClassRegistry(self.executor, self.config.default_value)

    @property
    def global_gate(self) -> Gate:
        return Gate(name=self.config.global_gate)

    def reset(self) -> None:
        """Drop all variables, gate expressions and class definitions."""
        self.scopes.clear()
        self.gates.clear()
        self.registry.clear()

    # -----------------------------------------------------------------------
    # Class construction
    # -----------------------------------------------------------------------

    @contextmanager
    def define_class(self, name: str, parent: ClassDef | None = None) -> Iterator[ClassBuilder]:
        """Open a class for the extent of a ``with`` block.

        Usage::

            with interp.define_class("Base") as base:
                interp.declare_var("var")
                interp.define_method("m1", [param("p1")], [...])
            Base = base.definition

        A class defined inside the block is nested in this one.  If the
        block raises, nothing is registered.
        """
        builder = self.registry.open_class(name, parent)
        try:
            yield builder
        except BaseException:
            self.registry.discard_class(builder)
            raise
        self.registry.close_class(builder)

    def open_class(self, name: str, parent: ClassDef | None = None) -> ClassBuilder:
        return self.registry.open_class(name, parent)

    def close_class(self) -> ClassDef:
        return self.registry.close_class()

    def declare_var(self, name: str, var_type: str | FuzzyType = FuzzyType.DOUBLE) -> None:
        self.registry.declare_var(name, var_type)

    def define_method(
        self,
        name: str,
        parameters: Sequence[Parameter] = (),
        body: Sequence[Statement] = (),
    ) -> MethodDef:
        return self.registry.define_method(name, parameters, body)

    def get_class(self, name: str) -> ClassDef:
        return self.registry.get(name)

    # -----------------------------------------------------------------------
    # Instances
    # -----------------------------------------------------------------------

    def instantiate(self, class_def: ClassDef) -> Instance:
        return self.registry.instantiate(class_def)

    def invoke_method(
        self,
        instance: Instance,
        method_name: str,
        args: Mapping[str, float] | None = None,
    ) -> float:
        return self.registry.invoke_method(instance, method_name, args)

    # -----------------------------------------------------------------------
    # Environment
    # -----------------------------------------------------------------------

    @staticmethod
    def _name_of(gate: Gate | GateScope | str) -> str:
        return gate if isinstance(gate, str) else gate.name

    def _gate_name(self, gate: Gate | GateScope | str | None) -> str:
        if gate is None:
            return self.config.global_gate
        return self._name_of(gate)

    def assign(
        self,
        target: object,
        expr: Expression,
        gate: Gate | GateScope | str | None = None,
    ) -> None:
        """Assign to a variable in *gate* (global by default), or assign
        *expr* to a gate.

        A variable target evaluates *expr* immediately in the context of
        *gate*.  A ``Gate`` (or ``GateScope``) target stores *expr*
        unevaluated.
        """
        if isinstance(target, VariableExpr):
            gate_name = self._gate_name(gate)
            if gate_name == self.config.global_gate:
                self.scopes.assign_global(target.name, self.evaluator.eval(expr))
            else:
                value = self.evaluator.eval(expr, None, gate_name)
                self.scopes.assign_in_gate(gate_name, target.name, value)
        elif isinstance(target, (Gate, GateScope)):
            self.gates.assign_expression(target.name, expr)
        else:
            raise InvalidAssignmentTarget(target)

    def assign_global(self, name: str, value: float) -> None:
        self.scopes.assign_global(name, value)

    def assign_in_gate(self, gate: Gate | GateScope | str, name: str, value: float) -> None:
        gate_name = self._gate_name(gate)
        if gate_name == self.config.global_gate:
            self.scopes.assign_global(name, value)
        else:
            self.scopes.assign_in_gate(gate_name, name, value)

    @contextmanager
    def scope(self, gate: Gate | str) -> Iterator[GateScope]:
        """Make *gate* the active gate for a ``with`` block.

        Usage::

            with interp.scope("g") as g:
                g.assign(var("A"), value(0.5))    # lands in g's table
                g.lookup("A")                     # 0.5

        The yielded ``GateScope`` carries the gate explicitly; calls made
        on the interpreter itself are unaffected.  Nothing is snapshotted
        or restored.
        """
        yield GateScope(self, gate if isinstance(gate, Gate) else Gate(name=gate))

    @contextmanager
    def anonymous_scope(self) -> Iterator[None]:
        """Revert every environment change made inside the ``with`` block.

        Restoration happens on every exit path, including exceptions.
        Gate expressions are not part of the snapshot.
        """
        state = self.scopes.snapshot()
        logger.debug("Entering anonymous scope")
        try:
            yield
        finally:
            self.scopes.restore(state)
            logger.debug("Anonymous scope restored")

    def snapshot(self) -> EnvState:
        return self.scopes.snapshot()

    def restore(self, state: EnvState) -> None:
        self.scopes.restore(state)

    def lookup(
        self,
        name: str,
        local_bindings: Mapping[str, float] | None = None,
        gate: Gate | GateScope | str = "",
    ) -> float:
        return self.scopes.lookup(name, local_bindings, self._active(gate))

    def evaluate(
        self,
        expr: Expression,
        local_bindings: Mapping[str, float] | None = None,
        gate: Gate | GateScope | str = "",
    ) -> float:
        return self.evaluator.eval(expr, local_bindings, self._active(gate))

    def _active(self, gate: Gate | GateScope | str) -> str:
        """The active gate name for lookup; the reserved global gate is none."""
        name = self._name_of(gate)
        return "" if name == self.config.global_gate else name

    # -----------------------------------------------------------------------
    # Gates
    # -----------------------------------------------------------------------

    def assign_expression(self, gate: Gate | GateScope | str, expr: Expression) -> None:
        self.gates.assign_expression(self._name_of(gate), expr)

    def evaluate_gate(self, gate: Gate | GateScope | str) -> float:
        return self.gates.evaluate(self._name_of(gate))

    def test_gate(self, gate: Gate | GateScope | str, var_name: str) -> float:
        return self.gates.test_variable(self._name_of(gate), var_name)
