# tests/conftest.py
import itertools

import pytest

from circuitsim_core import Wire, create_component


def endpoint_to_terminal(endpoint: str) -> str:
    """'R1.terminal1' -> 'R1-terminal1'."""
    component_id, terminal_name = endpoint.split(".", 1)
    return f"{component_id}-{terminal_name}"


@pytest.fixture
def make():
    """Factory: make("resistor", "R1", resistance=1000.0)."""
    def _make(kind, component_id, **parameters):
        return create_component(kind, component_id, parameters)
    return _make


@pytest.fixture
def wire():
    """Factory: wire("V1.positive", "R1.terminal1") with sequential default ids."""
    counter = itertools.count(1)

    def _wire(from_endpoint, to_endpoint, wire_id=None):
        return Wire(
            id=wire_id or f"w{next(counter)}",
            from_terminal=endpoint_to_terminal(from_endpoint),
            to_terminal=endpoint_to_terminal(to_endpoint),
        )
    return _wire


@pytest.fixture
def source_and_resistor(make, wire):
    """A 5 V DC source across a 1 kOhm resistor."""
    components = [
        make("voltage_source", "V1", amplitude=5.0),
        make("resistor", "R1", resistance=1000.0),
    ]
    wires = [
        wire("V1.positive", "R1.terminal1"),
        wire("R1.terminal2", "V1.negative"),
    ]
    return components, wires


@pytest.fixture
def voltage_divider(make, wire):
    """A 10 V DC source across two 1 kOhm resistors in series."""
    components = [
        make("voltage_source", "V1", amplitude=10.0),
        make("resistor", "R1", resistance=1000.0),
        make("resistor", "R2", resistance=1000.0),
    ]
    wires = [
        wire("V1.positive", "R1.terminal1"),
        wire("R1.terminal2", "R2.terminal1"),
        wire("R2.terminal2", "V1.negative"),
    ]
    return components, wires
