# src/circuitsim_core/analysis/tools.py
"""
Provides the node identification service: wires are ideal, so every set of
terminals they join is one electrical node.
"""
# Required for forward references in type hints
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from networkx.utils import UnionFind

from ..components.base_enums import ComponentKind
from ..constants import GROUND_SENTINEL
from .exceptions import TopologyAnalysisError
from .results import NodeAnalysisResults

if TYPE_CHECKING:
    from ..data_structures import Component, Wire

logger = logging.getLogger(__name__)

#: Kinds whose second terminal may anchor the ground node, in list order.
GROUND_ANCHOR_KINDS = frozenset({
    ComponentKind.VOLTAGE_SOURCE,
    ComponentKind.BATTERY,
    ComponentKind.GROUND,
})


class NodeIdentifier:
    """
    Groups terminals into nodes with a disjoint-set union, one union per wire.

    This is a stateless service over a snapshot of the components and wires;
    construct a new one each tick.
    """
    def __init__(self, components: Sequence[Component], wires: Sequence[Wire]):
        self.components = components
        self.wires = wires

    def analyze(self) -> NodeAnalysisResults:
        """
        Performs node identification, ground selection and row assignment.

        Returns:
            The immutable NodeAnalysisResults for this snapshot.

        Raises:
            TopologyAnalysisError: Two terminals share an id.
        """
        terminal_order = self._collect_terminals()
        sets = UnionFind(terminal_order)
        known = set(terminal_order)

        for wire in self.wires:
            if wire.from_terminal not in known or wire.to_terminal not in known:
                logger.debug(
                    f"Skipping wire '{wire.id}': it references an unknown terminal "
                    f"('{wire.from_terminal}' -> '{wire.to_terminal}')."
                )
                continue
            sets.union(wire.from_terminal, wire.to_terminal)

        # Name each node after its first terminal in discovery order, independent
        # of which root the union-find happened to pick.
        root_to_node: Dict[str, str] = {}
        terminal_to_node: Dict[str, str] = {}
        node_members: Dict[str, List[str]] = {}
        for terminal_id in terminal_order:
            root = sets[terminal_id]
            node = root_to_node.setdefault(root, terminal_id)
            terminal_to_node[terminal_id] = node
            node_members.setdefault(node, []).append(terminal_id)
        nodes = list(node_members)

        ground_node = self._select_ground(nodes, terminal_to_node)
        node_rows: Dict[str, int] = {}
        next_row = 0
        for node in nodes:
            if node == ground_node:
                node_rows[node] = GROUND_SENTINEL
            else:
                node_rows[node] = next_row
                next_row += 1

        logger.debug(
            f"Identified {len(nodes)} node(s) from {len(terminal_order)} terminal(s) and "
            f"{len(self.wires)} wire(s); ground node is '{ground_node}'."
        )
        return NodeAnalysisResults(
            nodes=nodes,
            terminal_to_node=terminal_to_node,
            node_members=node_members,
            node_rows=node_rows,
            ground_node=ground_node,
        )

    def _collect_terminals(self) -> List[str]:
        order: List[str] = []
        owners: Dict[str, str] = {}
        for comp in self.components:
            for terminal in comp.terminals:
                if terminal.id in owners:
                    raise TopologyAnalysisError(
                        details=(
                            f"Terminal id '{terminal.id}' is used by both '{owners[terminal.id]}' "
                            f"and '{comp.id}'."
                        ),
                        component_id=comp.id,
                    )
                owners[terminal.id] = comp.id
                order.append(terminal.id)
        return order

    def _select_ground(self, nodes: List[str], terminal_to_node: Dict[str, str]) -> Optional[str]:
        """
        The first source-like component fixes ground at its second terminal's
        node; without one, the first discovered node is ground. This is a
        heuristic: circuits with several sources or ground symbols get a single
        reference chosen by list order.
        """
        for comp in self.components:
            if comp.kind in GROUND_ANCHOR_KINDS:
                return terminal_to_node[comp.terminals[1].id]
        return nodes[0] if nodes else None


def identify_nodes(components: Sequence[Component], wires: Sequence[Wire]) -> NodeAnalysisResults:
    """Convenience wrapper around NodeIdentifier(components, wires).analyze()."""
    return NodeIdentifier(components, wires).analyze()
