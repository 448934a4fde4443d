"""Gate references."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

GLOBAL_GATE_NAME = "global"


class Gate(BaseModel):
    """A named scope holding its own variable table and, optionally, one
    assigned expression.

    The name ``"global"`` is reserved for the global table.
    """

    model_config = ConfigDict(frozen=True)

    name: str
