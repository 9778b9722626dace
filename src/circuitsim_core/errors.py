# src/circuitsim_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class CircuitSimError(Exception):
    """Base class for all custom, user-facing errors in circuitsim-core."""
    pass

class CircuitBuildError(CircuitSimError):
    """
    Raised when turning a scene description into simulation-ready components fails,
    from YAML parsing to unit conversion. The message is a pre-formatted,
    user-friendly diagnostic report.
    """
    pass

class SimulationRunError(CircuitSimError):
    """
    Raised when a simulation run is driven incorrectly, e.g. stepped with a
    non-positive time step or configured with an invalid speed multiplier.
    """
    pass

class FrameworkLogicError(CircuitSimError):
    """
    Raised when an internal contract of the simulation core is violated. This never
    signals a problem with the user's circuit; it indicates a bug in the core.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    The common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and it
    declares `get_diagnostic_report` as abstract so every subclass must be able
    to describe itself to the user. The step coordinator relies on this: any
    DiagnosableError escaping the solve is turned into a single halting fault
    whose message is taken from `short_message()`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError

    def short_message(self) -> str:
        """A single-line summary, used where a full report is too verbose."""
        return str(self)


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Singular System").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component id, source
                 file, user input, simulation time).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============ circuitsim-core: Actionable Diagnostic Report ============",
        f"Error Type:     {error_type}",
    ]
    if component_id := context.get('component_id'):
        lines.append(f"Component:      {component_id}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if sim_time := context.get('sim_time'):
        lines.append(f"Sim Time:       {sim_time}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=======================================================================")
    return "\n".join(lines)
