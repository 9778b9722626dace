# tests/test_mna_assembly.py
import numpy as np
import pytest
from numpy.testing import assert_allclose

from circuitsim_core import ComponentError, identify_nodes
from circuitsim_core.analysis import NodeAnalysisResults
from circuitsim_core.constants import OPEN_CIRCUIT_RESISTANCE_OHMS, SHORT_CIRCUIT_RESISTANCE_OHMS
from circuitsim_core.simulation import MnaAssembler, MnaInputError


def assemble(components, wires):
    return MnaAssembler(components, identify_nodes(components, wires)).assemble()


def test_source_and_resistor_stamps(source_and_resistor):
    components, wires = source_and_resistor
    system = assemble(components, wires)

    # Row 0: the node joining V1+ and R1; row 1: the V1 branch current.
    assert system.size == 2
    assert system.num_node_rows == 1
    assert system.branch_rows == {"V1": 1}
    assert_allclose(system.matrix, [[1e-3, 1.0], [1.0, 0.0]])
    assert_allclose(system.rhs, [0.0, 5.0])
    assert system.resistances == {"R1": 1000.0}


def test_conductance_between_two_unknown_nodes_is_symmetric(voltage_divider):
    components, wires = voltage_divider
    system = assemble(components, wires)

    g = 1e-3
    expected = np.array([
        [g, -g, 1.0],
        [-g, 2 * g, 0.0],
        [1.0, 0.0, 0.0],
    ])
    assert_allclose(system.matrix, expected)
    assert_allclose(system.rhs, [0.0, 0.0, 10.0])


def test_battery_internal_resistance_on_branch_diagonal(make, wire):
    components = [
        make("battery", "B1", nominal_voltage=9.0, internal_resistance=0.1),
        make("resistor", "R1", resistance=0.9),
    ]
    wires = [wire("B1.positive", "R1.terminal1"), wire("R1.terminal2", "B1.negative")]
    system = assemble(components, wires)

    assert system.matrix[1, 1] == pytest.approx(-0.1)
    assert system.rhs[1] == pytest.approx(9.0)


@pytest.mark.parametrize("kind, parameters, expected", [
    ("switch", {"closed": True}, SHORT_CIRCUIT_RESISTANCE_OHMS),
    ("switch", {"closed": False}, OPEN_CIRCUIT_RESISTANCE_OHMS),
    ("fuse", {}, SHORT_CIRCUIT_RESISTANCE_OHMS),
    ("lamp", {"voltage_rating": 12.0, "power_rating": 60.0}, 2.4),
    ("diode", {}, 100.0),
    ("led", {}, 50.0),
    ("capacitor", {}, OPEN_CIRCUIT_RESISTANCE_OHMS),
    ("inductor", {}, SHORT_CIRCUIT_RESISTANCE_OHMS),
    ("potentiometer", {"max_resistance": 10_000.0, "wiper_percent": 25.0}, 2500.0),
    ("potentiometer", {"wiper_percent": 0.0}, 0.01),
])
def test_per_kind_stamped_resistance(make, wire, kind, parameters, expected):
    components = [make("voltage_source", "V1"), make(kind, "X1", **parameters)]
    first, second = components[1].terminals
    wires = [wire("V1.positive", f"X1.{first.name}"), wire(f"X1.{second.name}", "V1.negative")]
    system = assemble(components, wires)

    assert system.resistances["X1"] == pytest.approx(expected)


def test_blown_fuse_and_broken_lamp_stamp_as_open(make, wire):
    fuse = make("fuse", "F1")
    fuse.state.blown = True
    lamp = make("lamp", "L1")
    lamp.state.broken = True
    system = assemble([make("voltage_source", "V1"), fuse, lamp], [])

    assert system.resistances["F1"] == OPEN_CIRCUIT_RESISTANCE_OHMS
    assert system.resistances["L1"] == OPEN_CIRCUIT_RESISTANCE_OHMS


def test_ground_symbol_with_both_terminals_on_one_node_adds_no_row(make, wire):
    components = [make("ground", "G1"), make("resistor", "R1")]
    wires = [wire("G1.ground", "G1.reference"), wire("R1.terminal2", "G1.ground")]
    system = assemble(components, wires)

    assert system.branch_rows == {}
    assert system.size == 1


def test_ground_symbol_between_distinct_nodes_ties_them(make, wire):
    components = [make("ground", "G1"), make("resistor", "R1")]
    wires = [wire("R1.terminal1", "G1.ground"), wire("R1.terminal2", "G1.reference")]
    system = assemble(components, wires)

    assert system.branch_rows == {"G1": 1}
    assert system.rhs[1] == 0.0


def test_invalid_state_is_rejected_before_stamping(make):
    resistor = make("resistor", "R1")
    resistor.state.resistance = 0.0
    with pytest.raises(ComponentError, match="resistance"):
        assemble([resistor], [])


def test_terminal_missing_from_node_map(make):
    r1 = make("resistor", "R1")
    r2 = make("resistor", "R2")
    nodes: NodeAnalysisResults = identify_nodes([r1], [])
    with pytest.raises(MnaInputError) as excinfo:
        MnaAssembler([r1, r2], nodes).assemble()
    assert excinfo.value.component_id == "R2"
