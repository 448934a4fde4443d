"""fzl builder API.

Users import everything from this single flat namespace::

    from fzl.framework import ADD, MULT, var, value, assign, return_, param
"""

from ._expressions import (
    # Expression leaves
    value,
    var,
    # Fuzzy operations
    ADD,
    MULT,
    AND,
    OR,
    XOR,
    COMPLEMENT,
    ALPHA_CUT,
    # Statements
    assign,
    return_,
    expr_stmt,
    # Parameters and gates
    param,
    gate,
    GLOBAL,
)

from fzl.model.classes import ClassDef, FuzzyType, Instance, MethodDef, Parameter
from fzl.model.expressions import Expression
from fzl.model.gates import Gate
from fzl.model.statements import Statement

__all__ = [
    "value",
    "var",
    "ADD",
    "MULT",
    "AND",
    "OR",
    "XOR",
    "COMPLEMENT",
    "ALPHA_CUT",
    "assign",
    "return_",
    "expr_stmt",
    "param",
    "gate",
    "GLOBAL",
    "ClassDef",
    "Expression",
    "FuzzyType",
    "Gate",
    "Instance",
    "MethodDef",
    "Parameter",
    "Statement",
]
