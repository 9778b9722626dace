# src/circuitsim_core/simulation/engine.py
"""
Defines the `SimulationEngine`, the stateless service that runs one tick.

A tick is: node identification -> stamping -> solve -> extraction -> per-component
update -> fault evaluation. The engine holds no state of its own; it operates on
the `TickContext` passed to it and returns a `TickResult`. The only mutation it
performs is advancing the component state records and terminal observations
that the context references.
"""
# Required for forward references in type hints
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

import numpy as np

from ..analysis import NodeAnalysisResults, NodeIdentifier
from ..components.base import SolvedPort, get_model
from ..components.exceptions import ComponentError
from ..constants import GROUND_SENTINEL
from ..errors import DiagnosableError
from ..protection import ProtectionEvaluator, solver_failure_fault
from .context import TickContext
from .mna import MnaAssembler, MnaSystem
from .results import TickResult
from .solver import solve_mna_system

if TYPE_CHECKING:
    from ..data_structures import Component

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    A stateless service that executes a single simulation tick.
    """
    def __init__(self, context: TickContext):
        """
        Initializes the engine with the full context for a single tick.

        Args:
            context: The immutable TickContext containing all inputs.
        """
        self.context: TickContext = context

    def execute_tick(self) -> TickResult:
        """
        Solves the network, advances every component and evaluates protection.

        Any DiagnosableError raised while building or solving the network is
        converted into a single halting fault; in that case no component state
        is touched and simulation time does not advance.
        """
        ctx = self.context
        try:
            nodes = NodeIdentifier(ctx.components, ctx.wires).analyze()
            system = MnaAssembler(ctx.components, nodes).assemble()
            solution = solve_mna_system(system.matrix, system.rhs)
        except DiagnosableError as e:
            return self._failed_tick(e)

        node_voltages = self._extract_node_voltages(nodes, solution)
        ports = {
            comp.id: self._solved_port(comp, nodes, system, solution, node_voltages)
            for comp in ctx.components
        }

        end_time = ctx.end_time
        for comp in ctx.components:
            get_model(comp.kind).update(comp, ports[comp.id], ctx.delta_time, end_time)

        evaluator = ProtectionEvaluator(ctx.components)
        faults = evaluator.evaluate(end_time)
        new_faults, _ = evaluator.partition(faults, ctx.known_faults)
        halted = evaluator.requires_halt(faults)
        if halted:
            logger.info(f"Tick ending at t={end_time:.4f}s reported a halting fault.")

        wire_voltages, wire_currents = self._wire_outputs(nodes, node_voltages, ports)
        return TickResult(
            sim_time=end_time,
            node_voltages=node_voltages,
            terminal_nodes=dict(nodes.terminal_to_node),
            ground_node=nodes.ground_node,
            component_voltages={cid: port.drop for cid, port in ports.items()},
            component_currents={cid: port.current for cid, port in ports.items()},
            wire_voltages=wire_voltages,
            wire_currents=wire_currents,
            faults=tuple(faults),
            new_faults=tuple(new_faults),
            halted=halted,
        )

    def _failed_tick(self, error: DiagnosableError) -> TickResult:
        ctx = self.context
        if isinstance(error, ComponentError) and error.sim_time is None:
            error.sim_time = ctx.sim_time
        logger.error(f"Network solve failed at t={ctx.sim_time:.4f}s: {error}")
        logger.debug(error.get_diagnostic_report())
        fault = solver_failure_fault(error, ctx.sim_time)
        new_faults, _ = ProtectionEvaluator.partition([fault], ctx.known_faults)
        return TickResult(
            sim_time=ctx.sim_time,
            faults=(fault,),
            new_faults=tuple(new_faults),
            halted=True,
            failure_report=error.get_diagnostic_report(),
        )

    @staticmethod
    def _extract_node_voltages(nodes: NodeAnalysisResults, solution: np.ndarray) -> Dict[str, float]:
        return {
            node: 0.0 if row == GROUND_SENTINEL else float(solution[row])
            for node, row in nodes.node_rows.items()
        }

    @staticmethod
    def _solved_port(comp: Component, nodes: NodeAnalysisResults, system: MnaSystem,
                     solution: np.ndarray, node_voltages: Dict[str, float]) -> SolvedPort:
        v_pos = node_voltages[nodes.terminal_to_node[comp.terminals[0].id]]
        v_neg = node_voltages[nodes.terminal_to_node[comp.terminals[1].id]]
        if comp.id in system.resistances:
            current = (v_pos - v_neg) / system.resistances[comp.id]
        elif comp.id in system.branch_rows:
            # The branch unknown is the current into the positive terminal.
            current = -float(solution[system.branch_rows[comp.id]])
        else:
            current = 0.0
        return SolvedPort(v_pos=v_pos, v_neg=v_neg, current=current)

    def _wire_outputs(self, nodes: NodeAnalysisResults, node_voltages: Dict[str, float],
                      ports: Dict[str, SolvedPort]):
        owner_of = {t.id: comp.id for comp in self.context.components for t in comp.terminals}
        wire_voltages: Dict[str, float] = {}
        wire_currents: Dict[str, float] = {}
        for wire in self.context.wires:
            if wire.from_terminal not in owner_of or wire.to_terminal not in owner_of:
                continue
            v_from = node_voltages[nodes.terminal_to_node[wire.from_terminal]]
            v_to = node_voltages[nodes.terminal_to_node[wire.to_terminal]]
            wire_voltages[wire.id] = (v_from + v_to) / 2.0
            wire_currents[wire.id] = abs(ports[owner_of[wire.from_terminal]].current)
        return wire_voltages, wire_currents


def execute_tick(context: TickContext) -> TickResult:
    """Runs a single tick described by `context`."""
    return SimulationEngine(context).execute_tick()
