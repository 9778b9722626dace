# src/circuitsim_core/simulation/__init__.py
from .exceptions import (
    MnaInputError,
    SingularSystemError,
)
from .config import SimulationConfig, ConfigParsingError, parse_simulation_config
from .context import TickContext
from .results import TickResult
from .mna import MnaAssembler, MnaSystem
from .solver import solve_mna_system
from .engine import SimulationEngine, execute_tick
from .execution import SimulationRun, run_transient

__all__ = [
    # Exceptions
    "MnaInputError",
    "SingularSystemError",
    "ConfigParsingError",
    # Contracts
    "SimulationConfig",
    "TickContext",
    "TickResult",
    "MnaSystem",
    # Core Classes
    "MnaAssembler",
    "solve_mna_system",
    "SimulationEngine",
    "execute_tick",
    "SimulationRun",
    "run_transient",
    "parse_simulation_config",
]
