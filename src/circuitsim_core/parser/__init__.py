# src/circuitsim_core/parser/__init__.py
from .raw_data import (
    ParsedCircuitData,
    ParsedComponentData,
    ParsedWireData,
)
from .parser import CircuitFileParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    # IR Data Structures
    "ParsedCircuitData",
    "ParsedComponentData",
    "ParsedWireData",
    # Parser and Exceptions
    "CircuitFileParser",
    "ParsingError",
    "SchemaValidationError",
]
