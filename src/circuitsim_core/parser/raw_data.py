# src/circuitsim_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# The classes in this module are the intermediate representation passed from
# the CircuitFileParser to the CircuitBuilder. Values are still raw: parameter
# values may be unit strings and wire endpoints are unresolved references.


@dataclass(frozen=True)
class ParsedComponentData:
    """IR for one component entry."""
    instance_id: str
    component_type: str
    raw_parameters_dict: Dict[str, Any]
    source_yaml_path: Path
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: float = 0.0


@dataclass(frozen=True)
class ParsedWireData:
    """
    IR for one wire entry. Endpoints are either "<component>.<terminal>" or a
    full terminal id "<component>-<terminal>".
    """
    wire_id: Optional[str]
    from_endpoint: str
    to_endpoint: str
    points: List[Tuple[float, float, float]] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedCircuitData:
    """Top-level IR node representing a single parsed circuit file."""
    circuit_name: str
    source_yaml_path: Path
    components: List[ParsedComponentData]
    wires: List[ParsedWireData]
    raw_simulation_config: Optional[Dict[str, Any]] = None
