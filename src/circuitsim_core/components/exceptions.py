# src/circuitsim_core/components/exceptions.py
"""
Defines the custom, diagnosable exceptions for the components subsystem.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ComponentError(DiagnosableError):
    """
    The canonical, diagnosable exception for all component-related errors.

    Raised when a component is constructed with a state record of the wrong
    kind, when its parameters make it impossible to stamp (e.g. a non-positive
    resistance), or when an action is applied to a component of the wrong kind.
    """
    component_id: str
    details: str
    sim_time: Optional[float] = None

    def __str__(self) -> str:
        return f"Component '{self.component_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a component error."""
        return format_diagnostic_report(
            error_type="Component Error",
            details=self.details,
            suggestion="Check the component's kind and parameters (e.g. positive resistance, positive capacitance, non-zero ratings).",
            context={
                'component_id': self.component_id,
                'sim_time': f"{self.sim_time:.6g} s" if self.sim_time is not None else None,
            }
        )
