"""Shared test helpers for the fzl test suite."""

import pytest

from fzl.framework import MULT, assign, param, return_, var
from fzl.runtime import create_interpreter


@pytest.fixture
def interp():
    """A fresh interpreter per test."""
    return create_interpreter()


def define_base(interp, name="Base"):
    """Define the reference ``Base`` class: ``var`` and ``m1(p1, p2)``.

    ``m1`` does ``somevar = var * p1; return somevar * 2.0``.
    """
    with interp.define_class(name) as base:
        interp.declare_var("var")
        interp.define_method(
            "m1",
            [param("p1"), param("p2")],
            [
                assign("somevar", MULT(var("var"), var("p1"))),
                return_(MULT(var("somevar"), 2.0)),
            ],
        )
    return base.definition
