# src/circuitsim_core/analysis/results.py
"""
Defines the formal, immutable result contract of node identification.

A NodeAnalysisResults is valid for a single tick: the mapping is rebuilt from
the wiring every time, so it never outlives the topology it was computed from.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..constants import GROUND_SENTINEL


@dataclass(frozen=True)
class NodeAnalysisResults:
    """
    The result of grouping terminals into electrical nodes.

    Nodes are named by their representative terminal, the first of their
    terminals in discovery order. `nodes` lists them in discovery order.
    `node_rows` gives each node its matrix row; the ground node maps to
    GROUND_SENTINEL.
    """
    nodes: List[str]
    terminal_to_node: Dict[str, str]
    node_members: Dict[str, List[str]]
    node_rows: Dict[str, int]
    ground_node: Optional[str]

    @property
    def num_unknown_nodes(self) -> int:
        """Number of non-ground nodes, i.e. node-voltage unknowns in the system."""
        return sum(1 for row in self.node_rows.values() if row != GROUND_SENTINEL)

    def row_of_terminal(self, terminal_id: str) -> int:
        return self.node_rows[self.terminal_to_node[terminal_id]]
