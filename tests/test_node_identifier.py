# tests/test_node_identifier.py
import pytest

from circuitsim_core import Component, Terminal, TopologyAnalysisError
from circuitsim_core.analysis import NodeIdentifier, identify_nodes
from circuitsim_core.components import ComponentKind, ResistorState
from circuitsim_core.constants import GROUND_SENTINEL


def test_wired_terminals_share_a_node(source_and_resistor):
    components, wires = source_and_resistor
    nodes = identify_nodes(components, wires)

    assert nodes.terminal_to_node["V1-positive"] == nodes.terminal_to_node["R1-terminal1"]
    assert nodes.terminal_to_node["V1-negative"] == nodes.terminal_to_node["R1-terminal2"]
    assert len(nodes.nodes) == 2


def test_nodes_are_named_by_first_terminal_in_discovery_order(voltage_divider):
    components, wires = voltage_divider
    nodes = NodeIdentifier(components, wires).analyze()

    assert nodes.nodes == ["V1-positive", "V1-negative", "R1-terminal2"]
    assert nodes.node_members["R1-terminal2"] == ["R1-terminal2", "R2-terminal1"]
    assert sorted(nodes.node_members["V1-negative"]) == ["R2-terminal2", "V1-negative"]


def test_every_terminal_maps_to_exactly_one_node(voltage_divider):
    components, wires = voltage_divider
    nodes = identify_nodes(components, wires)

    all_terminals = [t.id for comp in components for t in comp.terminals]
    members = [t for node in nodes.nodes for t in nodes.node_members[node]]
    assert sorted(members) == sorted(all_terminals)
    assert set(nodes.terminal_to_node) == set(all_terminals)


def test_ground_is_second_terminal_of_first_source(make, wire):
    components = [
        make("resistor", "R1"),
        make("battery", "B1"),
        make("voltage_source", "V1"),
    ]
    wires = [
        wire("B1.positive", "R1.terminal1"),
        wire("R1.terminal2", "B1.negative"),
    ]
    nodes = identify_nodes(components, wires)

    assert nodes.ground_node == nodes.terminal_to_node["B1-negative"]
    assert nodes.node_rows[nodes.ground_node] == GROUND_SENTINEL


def test_ground_symbol_anchors_ground_when_listed_first(make, wire):
    components = [
        make("ground", "G1"),
        make("voltage_source", "V1"),
        make("resistor", "R1"),
    ]
    wires = [wire("V1.negative", "G1.reference")]
    nodes = identify_nodes(components, wires)

    assert nodes.ground_node == nodes.terminal_to_node["G1-reference"]
    assert nodes.terminal_to_node["V1-negative"] == nodes.ground_node


def test_without_a_source_the_first_node_is_ground(make, wire):
    components = [make("resistor", "R1"), make("resistor", "R2")]
    wires = [wire("R1.terminal2", "R2.terminal1")]
    nodes = identify_nodes(components, wires)

    assert nodes.ground_node == "R1-terminal1"


def test_rows_are_contiguous_in_discovery_order(voltage_divider):
    components, wires = voltage_divider
    nodes = identify_nodes(components, wires)

    rows = [nodes.node_rows[node] for node in nodes.nodes if node != nodes.ground_node]
    assert rows == list(range(len(rows)))
    assert nodes.num_unknown_nodes == 2
    assert nodes.row_of_terminal("R2-terminal1") == 1


def test_unwired_component_gets_singleton_nodes(make):
    nodes = identify_nodes([make("resistor", "R1")], [])

    assert nodes.node_members == {"R1-terminal1": ["R1-terminal1"], "R1-terminal2": ["R1-terminal2"]}


def test_wires_to_unknown_terminals_are_skipped(make, wire):
    components = [make("resistor", "R1")]
    nodes = identify_nodes(components, [wire("R1.terminal1", "GHOST.terminal1")])

    assert len(nodes.nodes) == 2
    assert "GHOST-terminal1" not in nodes.terminal_to_node


def test_empty_circuit_has_no_ground():
    nodes = identify_nodes([], [])
    assert nodes.nodes == []
    assert nodes.ground_node is None


def test_duplicate_terminal_ids_are_rejected(make):
    r1 = make("resistor", "R1")
    impostor = Component(
        id="R1",
        kind=ComponentKind.RESISTOR,
        terminals=(
            Terminal(id="R1-terminal1", component_id="R1", name="terminal1"),
            Terminal(id="R1-terminal2", component_id="R1", name="terminal2"),
        ),
        state=ResistorState(),
    )
    with pytest.raises(TopologyAnalysisError, match="R1-terminal1"):
        identify_nodes([r1, impostor], [])
