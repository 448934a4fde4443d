"""Scope manager: the global variable table and per-gate variable tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from ._errors import VariableNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvState:
    """A deep copy of the environment taken by ``ScopeManager.snapshot()``."""

    global_vars: dict[str, float] = field(default_factory=dict)
    gate_vars: dict[str, dict[str, float]] = field(default_factory=dict)


def _copy_gates(gates: Mapping[str, Mapping[str, float]]) -> dict[str, dict[str, float]]:
    return {gate: dict(table) for gate, table in gates.items()}


class ScopeManager:
    """Owns the global table and the mapping of gate name -> variable table.

    A gate's table is created on the first assignment into that gate and
    is only ever discarded by ``restore()`` or ``clear()``.
    """

    def __init__(self) -> None:
        self.global_vars: dict[str, float] = {}
        self.gate_vars: dict[str, dict[str, float]] = {}

    # -----------------------------------------------------------------------
    # Assignment
    # -----------------------------------------------------------------------

    def assign_global(self, name: str, value: float) -> None:
        self.global_vars[name] = value

    def assign_in_gate(self, gate_name: str, name: str, value: float) -> None:
        self.gate_vars.setdefault(gate_name, {})[name] = value

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def has_gate(self, gate_name: str) -> bool:
        return gate_name in self.gate_vars

    def gate_table(self, gate_name: str) -> dict[str, float] | None:
        """The live variable table of *gate_name*, or None if it has none."""
        return self.gate_vars.get(gate_name)

    def lookup(
        self,
        name: str,
        local_bindings: Mapping[str, float] | None = None,
        active_gate: str = "",
    ) -> float:
        """Resolve *name*: local bindings, then the active gate, then global."""
        if local_bindings and name in local_bindings:
            return local_bindings[name]
        if active_gate:
            table = self.gate_vars.get(active_gate)
            if table is not None and name in table:
                return table[name]
        if name in self.global_vars:
            return self.global_vars[name]
        raise VariableNotFound(name, active_gate or None)

    # -----------------------------------------------------------------------
    # Snapshot / restore
    # -----------------------------------------------------------------------

    def snapshot(self) -> EnvState:
        """Deep-copy the global table and every gate table."""
        return EnvState(
            global_vars=dict(self.global_vars),
            gate_vars=_copy_gates(self.gate_vars),
        )

    def restore(self, state: EnvState) -> None:
        """Replace the live tables wholesale with *state*.

        Gates created since the snapshot are dropped and mutated gates
        revert.  *state* itself is copied, so it can be restored again.
        """
        dropped = self.gate_vars.keys() - state.gate_vars.keys()
        if dropped:
            logger.debug("Discarding gate tables %s", sorted(dropped))
        self.global_vars = dict(state.global_vars)
        self.gate_vars = _copy_gates(state.gate_vars)

    def clear(self) -> None:
        self.global_vars = {}
        self.gate_vars = {}
