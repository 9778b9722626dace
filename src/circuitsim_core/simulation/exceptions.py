# src/circuitsim_core/simulation/exceptions.py
"""
Defines custom, diagnosable exceptions specific to assembling and solving the
network equations.

All exceptions in this module inherit from `DiagnosableError`, so the step
coordinator can catch them as a family at the tick boundary and turn them into
a single halting fault.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class MnaInputError(DiagnosableError):
    """
    Raised when a component's stamp cannot be placed in the system, e.g. because
    one of its terminals was not assigned to any node.
    """
    component_id: str
    details: str

    def __str__(self) -> str:
        return f"Component '{self.component_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for an MNA input error."""
        return format_diagnostic_report(
            error_type="MNA Input Error",
            details=self.details,
            suggestion="The node map must be computed from the same components that are being stamped. Rebuild it before assembling the system.",
            context={'component_id': self.component_id}
        )


@dataclass()
class SingularSystemError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when the network equations have no unique solution.

    This class uses multiple inheritance to be catchable both as our custom
    `DiagnosableError` and as a standard `LinAlgError`.
    """
    details: str
    pivot_index: Optional[int] = None

    def __str__(self):
        where = f" at pivot {self.pivot_index}" if self.pivot_index is not None else ""
        return f"Singular system{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a singular system."""
        return format_diagnostic_report(
            error_type="Singular System Encountered",
            details=str(self),
            suggestion="This is usually a part of the circuit with no path to ground, two ideal sources in parallel, or a voltage source shorted by a wire. Check the wiring around the sources and ground.",
            context={}
        )
