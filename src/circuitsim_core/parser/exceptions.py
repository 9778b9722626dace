# src/circuitsim_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for the parsing and schema validation stage.

`ParsingError` covers file-level and syntax problems; `SchemaValidationError`
covers YAML that loads but does not match the circuit file schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """A local base class for all circuit file parsing and schema validation errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the circuit file.",
            context={}
        )


def _format_cerberus_errors(errors: Dict[str, Any], prefix: str = "") -> list:
    """Flattens Cerberus' nested error tree into 'path: message' lines."""
    lines = []
    for key, messages in sorted(errors.items(), key=lambda item: str(item[0])):
        path = f"{prefix}.{key}" if prefix else str(key)
        for message in messages:
            if isinstance(message, dict):
                lines.extend(_format_cerberus_errors(message, path))
            else:
                lines.append(f"{path}: {message}")
    return lines


@dataclass()
class ParsingError(BaseParsingError):
    """
    Raised when a circuit file cannot be read or is not valid YAML, or when its
    root is not a mapping.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(BaseParsingError):
    """
    Raised when the YAML is syntactically valid but does not conform to the
    circuit file schema (missing keys, unknown component types, invalid
    identifiers, duplicate ids).
    """
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [f"  - {line}" for line in _format_cerberus_errors(self.errors)]
        return (
            f"YAML schema validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_lines = _format_cerberus_errors(self.errors)
        details = (
            "The structure of the circuit file does not conform to the required schema.\n"
            f"See details for {len(error_lines)} issue(s) below:\n\n"
            + "\n".join(f"  - Field {line}" for line in error_lines)
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion="Correct the specified fields to match the documented format. Check for unknown component types, invalid identifiers (e.g. using '-' or '.'), duplicate ids, or a missing 'components' section.",
            context={'source_file': self.file_path}
        )
