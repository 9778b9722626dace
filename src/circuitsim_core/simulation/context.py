# src/circuitsim_core/simulation/context.py
"""
Defines the `TickContext`, the explicit input of a single simulation tick.
"""
# Required for forward references in type hints
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from ..data_structures import Component, Wire
    from ..protection.faults import Fault


@dataclass(frozen=True)
class TickContext:
    """
    An immutable description of one tick: which components and wires to solve,
    how far to advance, and from when.

    The container is frozen; the component state records it references are
    not, and are advanced in place by the tick. `known_faults` are the faults
    the caller has already seen, used to tell new reports from repeated ones.
    """
    components: Sequence[Component]
    wires: Sequence[Wire]
    delta_time: float
    sim_time: float = 0.0
    known_faults: Tuple[Fault, ...] = ()

    def __post_init__(self):
        if not (isinstance(self.delta_time, (int, float)) and math.isfinite(self.delta_time)
                and self.delta_time > 0):
            raise ValueError(f"delta_time must be a finite, positive number of seconds, got {self.delta_time!r}.")

    @property
    def end_time(self) -> float:
        """Simulation time once this tick has been applied."""
        return self.sim_time + self.delta_time
