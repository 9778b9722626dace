# src/circuitsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("CircuitSim Core package initialized.")

# Components first: importing them registers every kind's model.
from .components import (
    ComponentKind, WaveformType, ComponentError, get_model,
    replace_fuse, repair_lamp, recharge_battery, set_switch, toggle_switch, set_wiper, set_waveform,
)
from .units import ureg, pint, Quantity
from .data_structures import Circuit, Component, Terminal, Wire, terminal_id_for
from .protection import Fault, FaultSeverity, FaultCode
from .analysis import NodeIdentifier, identify_nodes, TopologyAnalysisError
from .parser import CircuitFileParser
from .circuit_builder import CircuitBuilder, create_component, load_circuit
from .simulation import (
    SimulationConfig, TickContext, TickResult, SimulationRun, execute_tick, run_transient,
    SingularSystemError,
)
from .errors import CircuitSimError, CircuitBuildError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Data Structures
    "Circuit", "Component", "Terminal", "Wire", "terminal_id_for",
    "ComponentKind", "WaveformType", "get_model",
    # Faults
    "Fault", "FaultSeverity", "FaultCode",
    # Node identification
    "NodeIdentifier", "identify_nodes",
    # Parser and Builder
    "CircuitFileParser", "CircuitBuilder", "create_component", "load_circuit",
    # Simulation
    "SimulationConfig", "TickContext", "TickResult", "SimulationRun", "execute_tick", "run_transient",
    # Component actions
    "replace_fuse", "repair_lamp", "recharge_battery", "set_switch", "toggle_switch", "set_wiper",
    "set_waveform",
    # Errors
    "CircuitSimError", "CircuitBuildError", "SimulationRunError",
    "ComponentError", "TopologyAnalysisError", "SingularSystemError",
]
