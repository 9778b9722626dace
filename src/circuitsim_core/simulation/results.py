# src/circuitsim_core/simulation/results.py
"""
Defines the formal, immutable result contract of a simulation tick.
"""
# Required for forward references in type hints
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Tuple

if TYPE_CHECKING:
    from ..protection.faults import Fault


@dataclass(frozen=True)
class TickResult:
    """
    Everything one tick produced.

    Attributes:
        sim_time: Simulation time at the end of the tick.
        node_voltages: Node name -> solved voltage; the ground node is 0.
        terminal_nodes: Terminal id -> node name.
        ground_node: The node chosen as reference, or None for an empty circuit.
        component_voltages: Component id -> voltage drop, first terminal minus second.
        component_currents: Component id -> solved current. For resistive kinds
            this is the drop over the stamped resistance; for sources it is the
            current delivered out of the positive terminal.
        wire_voltages: Wire id -> average of its two endpoint node voltages.
        wire_currents: Wire id -> absolute solved current of the component that
            owns the wire's "from" terminal. This attributes a component's
            current to every wire leaving it, which is only exact for simple
            series paths.
        faults: Every fault reported this tick, including repeats.
        new_faults: The subset of `faults` not in the tick's known faults.
        halted: True if any fault in `faults` requires the simulation to stop.
        failure_report: The diagnostic report when the network could not be solved.
    """
    sim_time: float
    node_voltages: Dict[str, float] = field(default_factory=dict)
    terminal_nodes: Dict[str, str] = field(default_factory=dict)
    ground_node: Optional[str] = None
    component_voltages: Dict[str, float] = field(default_factory=dict)
    component_currents: Dict[str, float] = field(default_factory=dict)
    wire_voltages: Dict[str, float] = field(default_factory=dict)
    wire_currents: Dict[str, float] = field(default_factory=dict)
    faults: Tuple[Fault, ...] = ()
    new_faults: Tuple[Fault, ...] = ()
    halted: bool = False
    failure_report: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.failure_report is None
