# src/circuitsim_core/circuit_builder.py
"""
Defines the CircuitBuilder, which turns a parsed circuit file into
simulation-ready `Component` and `Wire` objects, and `create_component`, the
factory that applies per-kind defaults.

Parameter values may be plain numbers, taken to be in the field's SI unit, or
unit strings converted with Pint ("1 kohm", "100 uF", "500 mA*h"). Wire
endpoints are resolved against the created components' terminals.

Any DiagnosableError raised while building is re-raised as a single,
user-facing CircuitBuildError carrying the diagnostic report.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pint

from .analysis.exceptions import TopologyAnalysisError
from .components.base import get_model
from .components.base_enums import ComponentKind, WaveformType
from .components.exceptions import ComponentError
from .components.states import STATE_CLASSES
from .components.waveforms import WaveformConfig
from .data_structures import Circuit, Component, Terminal, Wire, terminal_id_for
from .errors import CircuitBuildError, DiagnosableError, format_diagnostic_report
from .parser.parser import CircuitFileParser
from .parser.raw_data import ParsedCircuitData, ParsedWireData
from .simulation.config import ConfigParsingError, parse_simulation_config
from .units import to_magnitude


logger = logging.getLogger(__name__)

# Field kinds that are not physical quantities.
_FLOAT = "float"
_BOOL = "bool"
_STR = "str"
_WAVEFORM = "waveform"

#: Accepted parameters per kind and the unit (or value kind) each is stored in.
PARAMETER_UNITS: Dict[ComponentKind, Dict[str, str]] = {
    ComponentKind.RESISTOR: {
        "resistance": "ohm", "max_power": "W", "critical_power": "W",
        "max_current": "A", "max_temperature": "degC",
    },
    ComponentKind.CAPACITOR: {"capacitance": "F", "max_voltage": "V"},
    ComponentKind.INDUCTOR: {"inductance": "H", "max_current": "A", "max_power": "W"},
    ComponentKind.DIODE: {
        "forward_voltage": "V", "reverse_breakdown": "V", "max_current": "A", "max_power": "W",
    },
    ComponentKind.LED: {
        "forward_voltage": "V", "color": _STR, "max_current": "A", "max_reverse_voltage": "V",
    },
    ComponentKind.FUSE: {"rating": "A"},
    ComponentKind.LAMP: {"voltage_rating": "V", "power_rating": "W"},
    ComponentKind.POTENTIOMETER: {"max_resistance": "ohm", "wiper_percent": _FLOAT, "max_power": "W"},
    ComponentKind.SWITCH: {"closed": _BOOL, "max_current": "A"},
    ComponentKind.BATTERY: {
        "nominal_voltage": "V", "capacity_mah": "mA*h", "internal_resistance": "ohm",
        "max_current": "A", "charge_remaining_mah": "mA*h",
    },
    ComponentKind.VOLTAGE_SOURCE: {
        "amplitude": "V", "waveform": _WAVEFORM, "frequency": "Hz", "duty_cycle": _FLOAT,
        "phase": "rad", "offset": "V", "max_current": "A",
    },
    ComponentKind.GROUND: {},
}

_WAVEFORM_FIELDS = ("frequency", "duty_cycle", "phase", "offset")


def _convert(component_id: str, name: str, value: Any, unit: str) -> Any:
    try:
        if unit == _BOOL:
            if not isinstance(value, bool):
                raise ValueError(f"expected true or false, got {value!r}")
            return value
        if unit == _STR:
            return str(value)
        if unit == _WAVEFORM:
            return WaveformType(str(value).lower())
        if unit == _FLOAT:
            if isinstance(value, bool):
                raise ValueError(f"expected a number, got {value!r}")
            return float(value)
        return to_magnitude(value, unit)
    except (ValueError, TypeError, AttributeError, pint.PintError) as e:
        raise ComponentError(
            component_id=component_id,
            details=f"Invalid value {value!r} for parameter '{name}' (expected {unit}): {e}",
        ) from e


def create_component(
    kind: Union[ComponentKind, str],
    component_id: str,
    parameters: Optional[Mapping[str, Any]] = None,
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0),
    rotation: float = 0.0,
) -> Component:
    """
    Creates a component of `kind` with its defaults, overridden by `parameters`.

    Raises:
        ComponentError: Unknown parameter, unconvertible value, or parameters
            the model cannot simulate (e.g. a non-positive resistance).
    """
    try:
        kind = ComponentKind(kind)
    except ValueError:
        raise ComponentError(component_id=component_id, details=f"Unknown component type '{kind}'.") from None

    accepted = PARAMETER_UNITS[kind]
    raw = dict(parameters or {})
    unknown = sorted(set(raw) - set(accepted))
    if unknown:
        raise ComponentError(
            component_id=component_id,
            details=f"Unknown parameter(s) {unknown} for a {kind}. Accepted parameters: {sorted(accepted)}.",
        )
    values = {name: _convert(component_id, name, value, accepted[name]) for name, value in raw.items()}

    if kind is ComponentKind.VOLTAGE_SOURCE:
        waveform_settings = {name: values.pop(name) for name in _WAVEFORM_FIELDS if name in values}
        waveform_type = values.pop("waveform", WaveformType.DC)
        values["waveform"] = WaveformConfig(type=waveform_type, **waveform_settings)

    state = STATE_CLASSES[kind](**values)
    model = get_model(kind)
    terminals = tuple(
        Terminal(id=terminal_id_for(component_id, name), component_id=component_id, name=name)
        for name in model.terminal_names
    )
    component = Component(id=component_id, kind=kind, terminals=terminals, state=state,
                          position=tuple(position), rotation=rotation)
    model.validate(component)
    logger.debug(f"Created {kind} '{component_id}' with state {state}.")
    return component


class CircuitBuilder:
    """
    Synthesizes a simulation-ready `Circuit` from a parsed circuit file.
    """

    def build_circuit(self, parsed: ParsedCircuitData) -> Circuit:
        """
        The main build-time entry point, with top-level error handling for the
        entire build stage.
        """
        logger.info(f"--- Starting circuit synthesis for '{parsed.circuit_name}' ---")
        try:
            components = [
                create_component(
                    comp.component_type, comp.instance_id, comp.raw_parameters_dict,
                    position=comp.position, rotation=comp.rotation,
                )
                for comp in parsed.components
            ]
            wires = self._build_wires(parsed.wires, components)
            simulation_config = parse_simulation_config(parsed.raw_simulation_config)
            circuit = Circuit(
                name=parsed.circuit_name,
                components=components,
                wires=wires,
                source_file_path=parsed.source_yaml_path,
                simulation_config=simulation_config,
            )
            logger.info(
                f"--- Circuit synthesis for '{circuit.name}' successful: "
                f"{len(components)} component(s), {len(wires)} wire(s). ---"
            )
            return circuit

        except DiagnosableError as e:
            raise CircuitBuildError(e.get_diagnostic_report()) from e
        except ConfigParsingError as e:
            report = format_diagnostic_report(
                error_type="Simulation Settings Error",
                details=str(e),
                suggestion="Check the 'simulation' section: durations must be positive (e.g. 0.01 or '10 ms') and speed a positive number.",
                context={'source_file': parsed.source_yaml_path}
            )
            raise CircuitBuildError(report) from e

    def _build_wires(self, parsed_wires: List[ParsedWireData], components: List[Component]) -> List[Wire]:
        terminal_ids = {t.id for comp in components for t in comp.terminals}
        wires: List[Wire] = []
        seen_ids = set()
        for index, raw in enumerate(parsed_wires, start=1):
            wire_id = raw.wire_id or f"wire_{index}"
            if wire_id in seen_ids:
                raise TopologyAnalysisError(details=f"Wire id '{wire_id}' is used more than once.")
            seen_ids.add(wire_id)
            wires.append(Wire(
                id=wire_id,
                from_terminal=self._resolve_endpoint(raw.from_endpoint, terminal_ids, wire_id),
                to_terminal=self._resolve_endpoint(raw.to_endpoint, terminal_ids, wire_id),
                points=list(raw.points),
            ))
        return wires

    @staticmethod
    def _resolve_endpoint(endpoint: str, terminal_ids: set, wire_id: str) -> str:
        """Maps "<component>.<terminal>" or "<component>-<terminal>" to a terminal id."""
        if "." in endpoint:
            component_id, terminal_name = endpoint.split(".", 1)
            candidate = terminal_id_for(component_id, terminal_name)
        else:
            candidate = endpoint
        if candidate not in terminal_ids:
            raise TopologyAnalysisError(
                details=(
                    f"Wire '{wire_id}' references '{endpoint}', which is not a terminal of any component. "
                    f"Known terminals: {sorted(terminal_ids)}."
                )
            )
        return candidate


def load_circuit(yaml_path: Union[str, Path]) -> Circuit:
    """Parses and builds a circuit file in one call."""
    try:
        parsed = CircuitFileParser().parse(yaml_path)
    except DiagnosableError as e:
        raise CircuitBuildError(e.get_diagnostic_report()) from e
    return CircuitBuilder().build_circuit(parsed)
