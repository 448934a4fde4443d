"""Class registry, class builders and the instance model.

Class definition follows a stack discipline: opening a class pushes a
``ClassBuilder``; declarations target the top of the stack; closing pops it
and freezes the builder into a ``ClassDef``.  A class closed while another
is still open becomes a nested class of that one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from fzl.model.classes import (
    ClassDef,
    FuzzyType,
    Instance,
    MethodDef,
    Parameter,
)
from fzl.model.statements import Statement

from ._errors import (
    ClassNotFound,
    InvalidDeclaration,
    MethodNotFound,
    MissingArgument,
)
from ._executor import Returned, StatementExecutor

logger = logging.getLogger(__name__)


class ClassBuilder:
    """Accumulates declarations for one class while it is open.

    After the class is closed, ``definition`` holds the finished
    ``ClassDef``.
    """

    def __init__(self, name: str, parent: ClassDef | None = None, default_value: float = 0.0) -> None:
        self.name = name
        self.parent = parent
        self.default_value = default_value
        self.variables: dict[str, float] = {}
        self.methods: dict[str, MethodDef] = {}
        self.nested_classes: dict[str, ClassDef] = {}
        self.definition: ClassDef | None = None

    def _require_open(self) -> None:
        if self.definition is not None:
            raise InvalidDeclaration(f"Class '{self.name}' is already closed")

    def declare_var(self, name: str, var_type: str | FuzzyType = FuzzyType.DOUBLE) -> None:
        self._require_open()
        try:
            FuzzyType(var_type)
        except ValueError:
            raise InvalidDeclaration(
                f"Only 'double' type is supported, but got '{var_type}'"
            ) from None
        self.variables[name] = self.default_value

    def define_method(
        self,
        name: str,
        parameters: Sequence[Parameter] = (),
        body: Sequence[Statement] = (),
    ) -> MethodDef:
        self._require_open()
        method = MethodDef(name=name, parameters=list(parameters), body=list(body))
        self.methods[name] = method
        return method

    def build(self) -> ClassDef:
        self._require_open()
        self.definition = ClassDef(
            name=self.name,
            variables=self.variables,
            methods=self.methods,
            parent=self.parent,
            nested_classes=self.nested_classes,
        )
        return self.definition


class ClassRegistry:
    """Owns top-level class definitions and the open-class stack.

    Parameters
    ----------
    executor : StatementExecutor
        Runs method bodies on invocation.
    default_value : float
        Default for declared variables and the result of a method that
        executes no return.
    """

    def __init__(self, executor: StatementExecutor, default_value: float = 0.0) -> None:
        self.executor = executor
        self.default_value = default_value
        self.classes: dict[str, ClassDef] = {}
        self._stack: list[ClassBuilder] = []

    # -----------------------------------------------------------------------
    # Definition
    # -----------------------------------------------------------------------

    @property
    def current(self) -> ClassBuilder | None:
        """The innermost open class, or None."""
        return self._stack[-1] if self._stack else None

    def open_class(self, name: str, parent: ClassDef | None = None) -> ClassBuilder:
        builder = ClassBuilder(name, parent, self.default_value)
        self._stack.append(builder)
        return builder

    def close_class(self, builder: ClassBuilder | None = None) -> ClassDef:
        """Close the innermost open class.

        If *builder* is given it must be the innermost open class.
        """
        if not self._stack:
            raise InvalidDeclaration("No class definition is open")
        if builder is not None and self._stack[-1] is not builder:
            self.discard_class(builder)
            raise InvalidDeclaration(
                f"Class '{builder.name}' closed while a class opened inside it is still open"
            )
        class_def = self._stack.pop().build()
        enclosing = self.current
        if enclosing is not None:
            enclosing.nested_classes[class_def.name] = class_def
            logger.debug("Defined nested class %s.%s", enclosing.name, class_def.name)
        else:
            self.classes[class_def.name] = class_def
            logger.debug(
                "Defined class %s (parent: %s)",
                class_def.name,
                class_def.parent.name if class_def.parent else None,
            )
        return class_def

    def discard_class(self, builder: ClassBuilder | None = None) -> None:
        """Pop open classes without registering them.

        Without *builder*, only the innermost class is dropped; otherwise
        every class down to and including *builder*.
        """
        if builder is not None and builder not in self._stack:
            return
        while self._stack:
            popped = self._stack.pop()
            logger.debug("Discarded class %s", popped.name)
            if builder is None or popped is builder:
                break

    def _require_open(self, what: str) -> ClassBuilder:
        builder = self.current
        if builder is None:
            raise InvalidDeclaration(f"Cannot declare {what} outside a class definition")
        return builder

    def declare_var(self, name: str, var_type: str | FuzzyType = FuzzyType.DOUBLE) -> None:
        self._require_open(f"variable '{name}'").declare_var(name, var_type)

    def define_method(
        self,
        name: str,
        parameters: Sequence[Parameter] = (),
        body: Sequence[Statement] = (),
    ) -> MethodDef:
        return self._require_open(f"method '{name}'").define_method(name, parameters, body)

    def get(self, name: str) -> ClassDef:
        try:
            return self.classes[name]
        except KeyError:
            raise ClassNotFound(name) from None

    def clear(self) -> None:
        self.classes.clear()
        self._stack.clear()

    # -----------------------------------------------------------------------
    # Instances
    # -----------------------------------------------------------------------

    def instantiate(self, class_def: ClassDef) -> Instance:
        """Create an instance, filling declared variables root-first.

        An ancestor's default never overwrites a name that is already
        present.
        """
        variables: dict[str, float] = {}
        for cls in class_def.lineage():
            for name, default in cls.variables.items():
                if name not in variables:
                    variables[name] = default
        return Instance(class_def=class_def, variables=variables)

    def invoke_method(
        self,
        instance: Instance,
        method_name: str,
        args: Mapping[str, float] | None = None,
    ) -> float:
        """Invoke *method_name* on *instance*.

        The call-local table starts as a copy of the instance's variables,
        overlaid with the parameters.  After the body stops, the whole
        call-local table is merged back into the instance, so assignments
        can introduce new instance variables.
        """
        args = args or {}
        found = instance.class_def.find_method(method_name)
        if found is None:
            raise MethodNotFound(method_name, instance.class_def.name)
        owner, method = found

        local_vars = dict(instance.variables)
        for param in method.parameters:
            if param.name not in args:
                raise MissingArgument(param.name)
            local_vars[param.name] = args[param.name]

        logger.debug(
            "Invoking %s.%s on instance of %s", owner.name, method_name, instance.class_def.name,
        )
        try:
            outcome = self.executor.execute_body(method.body, local_vars)
        finally:
            instance.variables.update(local_vars)

        if isinstance(outcome, Returned):
            logger.debug("%s.%s returned %s", owner.name, method_name, outcome.value)
            return outcome.value
        return self.default_value
