# tests/test_parser.py
from pathlib import Path

import pytest

from circuitsim_core.parser import CircuitFileParser, ParsingError, SchemaValidationError


@pytest.fixture
def parser():
    return CircuitFileParser()


@pytest.fixture
def basic_scene_yaml():
    return """
circuit_name: Flashlight
components:
  - id: B1
    type: battery
    parameters:
      nominal_voltage: 4.5 V
      capacity_mah: 1200 mA*h
    position: [0, 0, 0]
  - id: S1
    type: switch
    parameters: {closed: true}
  - id: L1
    type: lamp
    parameters:
      voltage_rating: 4.5
      power_rating: 2 W
    rotation: 1.57
wires:
  - {id: w_supply, from: B1.positive, to: S1.in}
  - {from: S1.out, to: L1-t1, points: [[0, 1], [2, 1, 0]]}
  - {from: L1.t2, to: B1.negative}
simulation:
  time_step: 20 ms
  speed: 1.5
"""


def write_scene(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "scene.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_parse_valid_scene(parser, tmp_path, basic_scene_yaml):
    parsed = parser.parse(write_scene(tmp_path, basic_scene_yaml))

    assert parsed.circuit_name == "Flashlight"
    assert [c.instance_id for c in parsed.components] == ["B1", "S1", "L1"]
    assert parsed.components[0].raw_parameters_dict == {"nominal_voltage": "4.5 V", "capacity_mah": "1200 mA*h"}
    assert parsed.components[1].raw_parameters_dict == {"closed": True}
    assert parsed.components[2].rotation == pytest.approx(1.57)
    assert parsed.components[0].position == (0.0, 0.0, 0.0)

    first, second, _ = parsed.wires
    assert first.wire_id == "w_supply"
    assert second.wire_id is None
    assert second.to_endpoint == "L1-t1"
    assert second.points == [(0.0, 1.0, 0.0), (2.0, 1.0, 0.0)]
    assert parsed.raw_simulation_config == {"time_step": "20 ms", "speed": 1.5}


def test_circuit_name_defaults_to_file_stem(parser, tmp_path):
    parsed = parser.parse(write_scene(tmp_path, "components: [{id: R1, type: resistor}]"))
    assert parsed.circuit_name == "scene"
    assert parsed.wires == []
    assert parsed.raw_simulation_config is None


def test_missing_file(parser, tmp_path):
    with pytest.raises(ParsingError, match="not found"):
        parser.parse(tmp_path / "missing.yaml")


def test_invalid_yaml(parser, tmp_path):
    with pytest.raises(ParsingError, match="Invalid YAML"):
        parser.parse(write_scene(tmp_path, "components: [unclosed"))


@pytest.mark.parametrize("content", ["", "- just\n- a list\n"])
def test_root_must_be_a_mapping(parser, tmp_path, content):
    with pytest.raises(ParsingError):
        parser.parse(write_scene(tmp_path, content))


@pytest.mark.parametrize("content, fragment", [
    ("components: [{id: R1, type: transistor}]", "unallowed value"),
    ("components: [{id: 1R, type: resistor}]", "forbidden character"),
    ("components: [{id: R-1, type: resistor}]", "['-']"),
    ("components: [{id: R1, type: resistor}, {id: R1, type: fuse}]", "Duplicate"),
    ("components: [{id: R1, type: resistor}]\nwires: [{from: R1, to: R1.terminal2}]", "endpoint"),
    ("components: [{id: R1, type: resistor}]\nnets: []", "unknown field"),
    ("components: []", "min length"),
])
def test_schema_violations(parser, tmp_path, content, fragment):
    with pytest.raises(SchemaValidationError) as excinfo:
        parser.parse(write_scene(tmp_path, content))
    assert fragment in str(excinfo.value.get_diagnostic_report())


def test_parse_data_without_a_file(parser):
    parsed = parser.parse_data({"components": [{"id": "G1", "type": "ground"}]}, Path("inline.yaml"))
    assert parsed.components[0].component_type == "ground"
    assert parsed.circuit_name == "inline"
