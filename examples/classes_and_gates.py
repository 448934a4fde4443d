"""Classes, inheritance, nested classes and gate scopes in fzl.

Demonstrates:
  - Base class with a variable and a two-parameter method
  - Derived class that adds a method and overrides another
  - Nested class definition
  - Global and gate-scoped assignment, gate expressions
  - Anonymous scopes that revert every change on exit
"""

from fzl.framework import (
    ADD, MULT,
    var, value, gate,
    assign, return_, param,
)
from fzl.runtime import FuzzyError, VariableNotFound, create_interpreter


interp = create_interpreter()


# =========================================================================
# Base class
# =========================================================================

with interp.define_class("Base") as base:
    interp.declare_var("var")
    interp.define_method(
        "m1",
        [param("p1"), param("p2")],
        [
            assign("somevar", MULT(var("var"), var("p1"))),
            return_(MULT(var("somevar"), 2.0)),
        ],
    )
Base = base.definition

base_instance = interp.instantiate(Base)
base_instance.variables["var"] = 0.3
print("m1 on Base (0.6):", interp.invoke_method(base_instance, "m1", {"p1": 1.0, "p2": 0.5}))


# =========================================================================
# Derived class: adds m2, overrides m1
# =========================================================================

with interp.define_class("Derived", parent=Base) as derived:
    interp.declare_var("derivedVar")
    interp.define_method(
        "m2",
        [param("p3")],
        [
            assign("derivedVar", ADD(var("var"), var("p3"))),
            return_(var("derivedVar")),
        ],
    )
    interp.define_method(
        "m1",
        [param("p1"), param("p2")],
        [
            assign("somevar", ADD(var("var"), var("p1"))),
            return_(ADD(var("somevar"), 0.0)),
        ],
    )
    interp.define_method("emptyMethod", [], [return_(0.0)])
Derived = derived.definition

derived_instance = interp.instantiate(Derived)
derived_instance.variables["var"] = 0.1
print("emptyMethod on Derived (0.0):", interp.invoke_method(derived_instance, "emptyMethod", {}))
print("m1 on Derived (0.22):", interp.invoke_method(derived_instance, "m1", {"p1": 0.12, "p2": 0.33}))
print("somevar on Derived (0.22):", derived_instance.variables["somevar"])
print("m2 on Derived (0.8):", interp.invoke_method(derived_instance, "m2", {"p3": 0.7}))

try:
    interp.invoke_method(base_instance, "m2", {"p3": 4.0})
except FuzzyError as e:
    print("m2 on Base fails:", e)


# =========================================================================
# Nested classes
# =========================================================================

with interp.define_class("Outer") as outer:
    interp.declare_var("outerVar")
    with interp.define_class("Inner"):
        interp.declare_var("innerVar")
        interp.define_method(
            "innerMethod",
            [],
            [assign("innerVar", 11.0), return_(var("innerVar"))],
        )

inner_instance = interp.instantiate(outer.definition.nested_classes["Inner"])
print("innerMethod (11.0):", interp.invoke_method(inner_instance, "innerMethod", {}))


# =========================================================================
# Scopes and gates
# =========================================================================

interp.assign(var("X"), value(0.2))
interp.assign(var("Y"), value(0.4))

with interp.scope("logicGate1") as g:
    g.assign(var("A"), value(0.5))
    g.assign(var("B"), value(0.7))

interp.assign(gate("logicGate1"), ADD(var("A"), var("B")))
print("A in logicGate1 (0.5):", interp.test_gate("logicGate1", "A"))
print("X via logicGate1 (0.2):", interp.test_gate("logicGate1", "X"))
print("logicGate1 A + B (1.0):", interp.evaluate_gate("logicGate1"))

with interp.anonymous_scope():
    interp.assign(var("Y"), value(0.9))
    with interp.scope("tempGate") as g:
        g.assign(var("tempVar"), value(0.11))
    with interp.scope("logicGate1") as g:
        g.assign(var("A"), value(0.29))
    print("logicGate1 inside anonymous scope (0.99):", interp.evaluate_gate("logicGate1"))
    print("tempVar inside anonymous scope (0.11):", interp.test_gate("tempGate", "tempVar"))

print("Y after anonymous scope (0.4):", interp.test_gate("global", "Y"))
print("A after anonymous scope (0.5):", interp.test_gate("logicGate1", "A"))
try:
    interp.test_gate("tempGate", "tempVar")
except VariableNotFound as e:
    print("tempGate is gone:", e)
