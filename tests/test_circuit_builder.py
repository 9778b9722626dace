# tests/test_circuit_builder.py
from pathlib import Path

import pytest

from circuitsim_core import (
    CircuitBuildError, CircuitBuilder, ComponentError, ComponentKind, SimulationRun, WaveformType,
    create_component, load_circuit,
)
from circuitsim_core.parser import CircuitFileParser


FLASHLIGHT_YAML = """
circuit_name: Flashlight
components:
  - id: B1
    type: battery
    parameters:
      nominal_voltage: 4.5 V
      capacity_mah: 1.2 A*h
      internal_resistance: 100 mohm
  - id: S1
    type: switch
    parameters: {closed: true}
  - id: L1
    type: lamp
    parameters:
      voltage_rating: 4.5
      power_rating: 2 W
wires:
  - {id: w_supply, from: B1.positive, to: S1.in}
  - {from: S1.out, to: L1-t1}
  - {from: L1.t2, to: B1.negative}
simulation:
  time_step: 20 ms
"""


def build_from_yaml(tmp_path: Path, content: str):
    path = tmp_path / "scene.yaml"
    path.write_text(content, encoding="utf-8")
    return load_circuit(path)


# --- create_component ---

def test_defaults_per_kind():
    resistor = create_component("resistor", "R1")
    assert resistor.kind is ComponentKind.RESISTOR
    assert resistor.state.resistance == 1000.0
    assert resistor.state.max_power == 0.25
    assert [t.id for t in resistor.terminals] == ["R1-terminal1", "R1-terminal2"]

    battery = create_component(ComponentKind.BATTERY, "B1")
    assert (battery.state.nominal_voltage, battery.state.capacity_mah) == (9.0, 500.0)
    assert battery.state.voltage == 9.0
    assert battery.state.charge_percent == 100.0

    source = create_component("voltage_source", "V1")
    assert source.state.output_voltage == 5.0
    assert source.state.waveform.type is WaveformType.DC


def test_unit_strings_are_converted():
    capacitor = create_component("capacitor", "C1", {"capacitance": "470 uF", "max_voltage": "16 V"})
    assert capacitor.state.capacitance == pytest.approx(470e-6)
    assert capacitor.state.max_voltage == pytest.approx(16.0)

    battery = create_component("battery", "B1", {"capacity_mah": "2 A*h", "internal_resistance": "50 mohm"})
    assert battery.state.capacity_mah == pytest.approx(2000.0)
    assert battery.state.internal_resistance == pytest.approx(0.05)

    hot = create_component("resistor", "R1", {"max_temperature": "150 degC"})
    assert hot.state.max_temperature == pytest.approx(150.0)
    kelvin = create_component("resistor", "R2", {"max_temperature": "400 K"})
    assert kelvin.state.max_temperature == pytest.approx(126.85)


def test_voltage_source_waveform_parameters():
    source = create_component("voltage_source", "V1", {
        "amplitude": "10 V", "waveform": "SQUARE", "frequency": "1 kHz", "duty_cycle": 0.25, "offset": 1,
    })
    config = source.state.waveform
    assert config.type is WaveformType.SQUARE
    assert config.frequency == pytest.approx(1000.0)
    assert config.duty_cycle == 0.25
    assert source.state.output_voltage == pytest.approx(11.0)


@pytest.mark.parametrize("kind, parameters, fragment", [
    ("resistor", {"capacitance": 1.0}, "Unknown parameter"),
    ("resistor", {"resistance": "5 farad"}, "resistance"),
    ("resistor", {"resistance": 0}, "positive"),
    ("switch", {"closed": "yes"}, "true or false"),
    ("voltage_source", {"waveform": "sawtooth"}, "waveform"),
    ("potentiometer", {"wiper_percent": 120}, "0-100"),
    ("fuse", {"rating": -1.0}, "rating"),
    ("transistor", {}, "Unknown component type"),
])
def test_invalid_parameters(kind, parameters, fragment):
    with pytest.raises(ComponentError, match=fragment):
        create_component(kind, "X1", parameters)


# --- CircuitBuilder ---

def test_build_flashlight(tmp_path):
    circuit = build_from_yaml(tmp_path, FLASHLIGHT_YAML)

    assert circuit.name == "Flashlight"
    assert list(circuit.components_by_id) == ["B1", "S1", "L1"]
    battery = circuit.components_by_id["B1"]
    assert battery.state.capacity_mah == pytest.approx(1200.0)
    assert battery.state.internal_resistance == pytest.approx(0.1)
    assert [(w.id, w.from_terminal, w.to_terminal) for w in circuit.wires] == [
        ("w_supply", "B1-positive", "S1-in"),
        ("wire_2", "S1-out", "L1-t1"),
        ("wire_3", "L1-t2", "B1-negative"),
    ]
    assert circuit.simulation_config.time_step == pytest.approx(0.02)
    assert circuit.source_file_path == (tmp_path / "scene.yaml").resolve()


def test_built_circuit_simulates(tmp_path):
    circuit = build_from_yaml(tmp_path, FLASHLIGHT_YAML)
    run = SimulationRun(circuit.components, circuit.wires, circuit.simulation_config)
    results = run.run(3)

    lamp = circuit.components_by_id["L1"].state
    assert len(results) == 3
    assert lamp.brightness > 0.9
    assert not lamp.broken
    assert run.sim_time == pytest.approx(0.06)


def test_unknown_wire_terminal_is_a_build_error(tmp_path):
    content = """
components:
  - {id: R1, type: resistor}
wires:
  - {from: R1.terminal1, to: R1.anode}
"""
    with pytest.raises(CircuitBuildError) as excinfo:
        build_from_yaml(tmp_path, content)
    report = str(excinfo.value)
    assert "R1.anode" in report
    assert "Topological Analysis Error" in report


def test_component_error_is_reported_with_component(tmp_path):
    content = """
components:
  - {id: R1, type: resistor, parameters: {resistance: 10 V}}
"""
    with pytest.raises(CircuitBuildError) as excinfo:
        build_from_yaml(tmp_path, content)
    assert "Component Error" in str(excinfo.value)
    assert "R1" in str(excinfo.value)


def test_schema_error_is_a_build_error(tmp_path):
    with pytest.raises(CircuitBuildError, match="YAML Schema Validation Error"):
        build_from_yaml(tmp_path, "components: [{id: R1, type: transistor}]")


def test_bad_simulation_settings(tmp_path):
    content = """
components:
  - {id: R1, type: resistor}
simulation:
  time_step: 3 ohm
"""
    with pytest.raises(CircuitBuildError, match="Simulation Settings Error"):
        build_from_yaml(tmp_path, content)


def test_builder_accepts_parsed_data_directly():
    parsed = CircuitFileParser().parse_data(
        {"components": [{"id": "G1", "type": "ground"}, {"id": "R1", "type": "resistor"}],
         "wires": [{"from": "R1.terminal2", "to": "G1.ground"}]},
        Path("inline.yaml"),
    )
    circuit = CircuitBuilder().build_circuit(parsed)
    assert circuit.wires[0].id == "wire_1"
    assert circuit.simulation_config.speed == 1.0
