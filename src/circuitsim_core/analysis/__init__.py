# src/circuitsim_core/analysis/__init__.py
"""
Defines the public interface for the analysis services package: grouping
terminals into electrical nodes, choosing the ground node and assigning matrix
rows, with a formal, immutable result contract.
"""
from .results import NodeAnalysisResults
from .tools import NodeIdentifier, identify_nodes
from .exceptions import TopologyAnalysisError

__all__ = [
    # Formal Result Contracts
    "NodeAnalysisResults",
    # Analysis Services
    "NodeIdentifier",
    "identify_nodes",
    # Exceptions
    "TopologyAnalysisError",
]
