# src/circuitsim_core/protection/faults.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)


class FaultSeverity(Enum):
    """Severity level of a fault report."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Fault:
    """
    A single, immutable report of an out-of-bounds or failure condition in a
    component or in the solve itself.

    `id` is stable for a given component and condition ("<component id>-<code>"),
    which lets a run recognise a condition it has already reported.
    `sim_time` is the simulation time at the end of the reporting tick.
    """
    id: str
    code: str
    severity: FaultSeverity
    message: str
    component_ids: Tuple[str, ...] = ()
    stop_simulation: bool = False
    sim_time: float = 0.0

    def __str__(self) -> str:
        parts = [f"[{self.severity.name} - {self.code}]"]
        if self.component_ids:
            parts.append(f"Components: {', '.join(self.component_ids)}")
        parts.append(f"Message: {self.message}")
        if self.stop_simulation:
            parts.append("(halts simulation)")
        return " ".join(parts)
