# src/circuitsim_core/simulation/mna.py
# Required for forward references in type hints
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence

import numpy as np

from ..analysis.results import NodeAnalysisResults
from ..components.base import get_model
from ..components.base_enums import StampType
from ..constants import GROUND_SENTINEL
from .exceptions import MnaInputError

if TYPE_CHECKING:
    from ..data_structures import Component

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MnaSystem:
    """
    The assembled linear system for one tick.

    Rows 0..num_node_rows-1 are node-voltage unknowns; the remaining rows are
    branch currents, one per branch-stamped component, at the index recorded in
    `branch_rows`. `resistances` holds the resistance each conductance-stamped
    component was stamped with, so its current can be recovered after the solve.
    """
    matrix: np.ndarray
    rhs: np.ndarray
    num_node_rows: int
    branch_rows: Dict[str, int]
    resistances: Dict[str, float]

    @property
    def size(self) -> int:
        return self.rhs.shape[0]


class MnaAssembler:
    """
    Constructs the Modified Nodal Analysis system G·x = I for a snapshot of the
    components and the node map computed from them.

    This class is agnostic to component kinds: it asks each component's
    registered model for its stamp type and values, and places them.
    Conductance stamps involving the ground node are dropped, since ground is
    not an unknown.
    """
    def __init__(self, components: Sequence[Component], nodes: NodeAnalysisResults):
        self.components = components
        self.nodes = nodes

    def assemble(self) -> MnaSystem:
        num_node_rows = self.nodes.num_unknown_nodes
        branch_components: List[Component] = []
        skipped_branches: List[str] = []
        for comp in self.components:
            model = get_model(comp.kind)
            model.validate(comp)
            if model.stamp_type is StampType.BRANCH:
                if self._is_trivial_branch(comp):
                    skipped_branches.append(comp.id)
                else:
                    branch_components.append(comp)

        size = num_node_rows + len(branch_components)
        matrix = np.zeros((size, size))
        rhs = np.zeros(size)
        branch_rows = {comp.id: num_node_rows + k for k, comp in enumerate(branch_components)}
        resistances: Dict[str, float] = {}

        for comp in self.components:
            model = get_model(comp.kind)
            row_p, row_n = self._rows_of(comp)
            if model.stamp_type is StampType.CONDUCTANCE:
                resistance = float(model.resistance(comp.state))
                resistances[comp.id] = resistance
                self._stamp_conductance(matrix, row_p, row_n, 1.0 / resistance)
            elif comp.id in branch_rows:
                self._stamp_branch(
                    matrix, rhs, branch_rows[comp.id], row_p, row_n,
                    float(model.branch_voltage(comp.state)),
                    float(model.branch_resistance(comp.state)),
                )

        if skipped_branches:
            logger.debug(f"Branch constraints satisfied trivially and left out: {skipped_branches}")
        logger.debug(
            f"Assembled MNA system: {num_node_rows} node row(s), {len(branch_rows)} branch row(s)."
        )
        return MnaSystem(
            matrix=matrix,
            rhs=rhs,
            num_node_rows=num_node_rows,
            branch_rows=branch_rows,
            resistances=resistances,
        )

    def _rows_of(self, comp: Component):
        try:
            return tuple(self.nodes.row_of_terminal(t.id) for t in comp.terminals)
        except KeyError as e:
            raise MnaInputError(
                component_id=comp.id,
                details=f"Terminal {e} was not assigned to any node.",
            ) from None

    def _is_trivial_branch(self, comp: Component) -> bool:
        """
        A 0 V constraint with no series resistance between two terminals on the
        same node (e.g. a ground symbol with both terminals wired together) is
        always satisfied and would only add an empty row.
        """
        row_p, row_n = self._rows_of(comp)
        model = get_model(comp.kind)
        return (row_p == row_n
                and model.branch_voltage(comp.state) == 0.0
                and model.branch_resistance(comp.state) == 0.0)

    @staticmethod
    def _stamp_conductance(matrix: np.ndarray, row_p: int, row_n: int, conductance: float) -> None:
        if row_p != GROUND_SENTINEL:
            matrix[row_p, row_p] += conductance
        if row_n != GROUND_SENTINEL:
            matrix[row_n, row_n] += conductance
        if row_p != GROUND_SENTINEL and row_n != GROUND_SENTINEL:
            matrix[row_p, row_n] -= conductance
            matrix[row_n, row_p] -= conductance

    @staticmethod
    def _stamp_branch(matrix: np.ndarray, rhs: np.ndarray, row_b: int, row_p: int, row_n: int,
                      voltage: float, series_resistance: float) -> None:
        """
        Adds the constraint V(p) - V(n) - R·i = voltage, where i is the branch
        current flowing into the positive terminal, and i's contribution to KCL
        at both nodes.
        """
        if row_p != GROUND_SENTINEL:
            matrix[row_p, row_b] += 1.0
            matrix[row_b, row_p] += 1.0
        if row_n != GROUND_SENTINEL:
            matrix[row_n, row_b] -= 1.0
            matrix[row_b, row_n] -= 1.0
        matrix[row_b, row_b] -= series_resistance
        rhs[row_b] += voltage
