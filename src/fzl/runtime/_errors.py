"""Runtime error types.

Every failure aborts the operation that raised it and propagates to the
caller; nothing in the runtime retries or recovers.
"""

from __future__ import annotations


class FuzzyError(Exception):
    """Base class for all interpreter errors."""


class VariableNotFound(FuzzyError):
    """Variable lookup exhausted the local, gate and global tables."""

    def __init__(self, name: str, gate_name: str | None = None) -> None:
        self.name = name
        self.gate_name = gate_name
        if gate_name:
            msg = f"Variable '{name}' not found globally or in gate '{gate_name}'"
        else:
            msg = f"Variable '{name}' not found"
        super().__init__(msg)


UnresolvedVariable = VariableNotFound


class NoExpressionAssigned(FuzzyError):
    def __init__(self, gate_name: str) -> None:
        self.gate_name = gate_name
        super().__init__(f"No expression assigned to gate '{gate_name}'")


class MissingArgument(FuzzyError):
    def __init__(self, param_name: str) -> None:
        self.param_name = param_name
        super().__init__(f"Missing argument for parameter '{param_name}'")


class MethodNotFound(FuzzyError):
    def __init__(self, method_name: str, class_name: str) -> None:
        self.method_name = method_name
        self.class_name = class_name
        super().__init__(
            f"Method '{method_name}' not found in class hierarchy of '{class_name}'"
        )


class ClassNotFound(FuzzyError):
    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"Class '{class_name}' is not registered")


class InvalidDeclaration(FuzzyError):
    """A declaration of an unsupported kind, or outside any open class."""


class InvalidAssignmentTarget(FuzzyError):
    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(
            f"Invalid assignment target: expected a variable or a gate, "
            f"got {type(target).__name__}"
        )
