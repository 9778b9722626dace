# src/circuitsim_core/data_structures.py
# Required for forward references in type hints
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .components.base_enums import ComponentKind
from .components.exceptions import ComponentError
from .components.states import STATE_CLASSES

if TYPE_CHECKING:
    from .simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


def terminal_id_for(component_id: str, terminal_name: str) -> str:
    """The canonical terminal id, unique across the whole circuit."""
    return f"{component_id}-{terminal_name}"


@dataclass
class Terminal:
    """
    A named connection point of a component. Wires attach to terminals, and a
    node is the set of terminals joined by wires.

    `voltage` and `current` are observations written back after each tick.
    """
    id: str
    component_id: str
    name: str
    offset: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    voltage: float = 0.0
    current: float = 0.0


@dataclass
class Wire:
    """
    An ideal, zero-resistance connection between two terminals. After each
    tick it carries the average of its endpoint node voltages and the current
    of the component owning its `from_terminal`.
    """
    id: str
    from_terminal: str
    to_terminal: str
    points: List[Tuple[float, float, float]] = field(default_factory=list)
    voltage: float = 0.0
    current: float = 0.0


@dataclass
class Component:
    """
    A placed circuit element: an id, its kind, exactly two terminals (positive
    first, negative second) and the kind-specific state record.

    The pairing of kind and state class is enforced at construction; the state
    is then mutated in place by the component's model on every tick.
    """
    id: str
    kind: ComponentKind
    terminals: Tuple[Terminal, Terminal]
    state: Any
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: float = 0.0

    def __post_init__(self):
        if not isinstance(self.kind, ComponentKind):
            raise ComponentError(self.id, f"kind must be a ComponentKind, got {self.kind!r}.")
        expected_state = STATE_CLASSES[self.kind]
        if not isinstance(self.state, expected_state):
            raise ComponentError(
                self.id,
                f"kind '{self.kind}' requires a {expected_state.__name__}, got {type(self.state).__name__}.",
            )
        self.terminals = tuple(self.terminals)
        if len(self.terminals) != 2:
            raise ComponentError(self.id, f"must have exactly 2 terminals, got {len(self.terminals)}.")
        for terminal in self.terminals:
            if terminal.component_id != self.id:
                raise ComponentError(
                    self.id, f"terminal '{terminal.id}' belongs to '{terminal.component_id}'.",
                )

    @property
    def positive(self) -> Terminal:
        return self.terminals[0]

    @property
    def negative(self) -> Terminal:
        return self.terminals[1]

    def terminal(self, name: str) -> Terminal:
        """Looks up one of this component's terminals by its name."""
        for candidate in self.terminals:
            if candidate.name == name:
                return candidate
        raise KeyError(f"Component '{self.id}' has no terminal named '{name}'.")


@dataclass(frozen=True)
class Circuit:
    """
    A simulation-ready circuit: components and wires, as produced by the
    CircuitBuilder from a parsed circuit file. It is a data container and holds
    no imperative logic; the lists inside it are the live objects the
    simulation mutates.
    """
    name: str
    components: List[Component]
    wires: List[Wire]
    source_file_path: Optional[Path] = None
    simulation_config: Optional[SimulationConfig] = None

    @property
    def components_by_id(self) -> Dict[str, Component]:
        return {comp.id: comp for comp in self.components}
