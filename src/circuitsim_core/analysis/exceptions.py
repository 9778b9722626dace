# src/circuitsim_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the analysis services.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class TopologyAnalysisError(DiagnosableError):
    """Raised when the wiring cannot be turned into a consistent node map."""
    details: str
    component_id: Optional[str] = None

    def __str__(self) -> str:
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Topological Analysis Error",
            details=self.details,
            suggestion="Check that component ids are unique and that every wire connects two existing terminals (e.g. 'R1.terminal1').",
            context={'component_id': self.component_id}
        )
