# src/circuitsim_core/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from ..components.base_enums import ComponentKind
from .exceptions import ParsingError, SchemaValidationError
from .raw_data import ParsedCircuitData, ParsedComponentData, ParsedWireData

logger = logging.getLogger(__name__)

# Identifiers exclude '.' and '-', the separators used in wire endpoint references
# and terminal ids.
ID_REGEX_FRAGMENT = r"[a-zA-Z_][a-zA-Z0-9_]*"
ID_REGEX = f"^{ID_REGEX_FRAGMENT}$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

# "<component>.<terminal>" or "<component>-<terminal>".
ENDPOINT_REGEX = f"^{ID_REGEX_FRAGMENT}[.-]{ID_REGEX_FRAGMENT}$"


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator enforcing identifier and endpoint conventions."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['endpoint_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint: return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                "and can only contain letters, numbers, and underscores. "
                f"This identifier contains the following forbidden character(s): {invalid_chars}"
            )
            self._error(field, message)

    def _validate_endpoint_regex(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(ENDPOINT_REGEX, value):
            self._error(
                field,
                f"Wire endpoint '{value}' is invalid. Use '<component>.<terminal>' "
                f"(e.g. 'R1.terminal1') or a terminal id (e.g. 'R1-terminal1').",
            )

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return  # Let the 'type: list' rule handle this.

        seen_keys = set()
        duplicates = set()
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is None:
                continue
            if item_key in seen_keys:
                duplicates.add(item_key)
            seen_keys.add(item_key)

        if duplicates:
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {sorted(duplicates)}")


class CircuitFileParser:
    """
    Parses and validates a circuit YAML file into the intermediate
    representation consumed by the CircuitBuilder. It performs no unit
    conversion and does not resolve wire endpoints.
    """
    _id_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}
    _point_rule = {"type": "list", "minlength": 2, "maxlength": 3, "schema": {"type": "number"}}

    _component_schema = {
        "id": _id_rule,
        "type": {"type": "string", "required": True, "allowed": [kind.value for kind in ComponentKind]},
        "parameters": {
            "type": "dict", "required": False,
            "keysrules": {"type": "string", "id_regex": True},
            "valuesrules": {"type": ["string", "number", "boolean"]},
        },
        "position": _point_rule,
        "rotation": {"type": "number", "required": False},
    }

    _wire_schema = {
        "id": {"type": "string", "required": False, "empty": False, "id_regex": True},
        "from": {"type": "string", "required": True, "empty": False, "endpoint_regex": True},
        "to": {"type": "string", "required": True, "empty": False, "endpoint_regex": True},
        "points": {"type": "list", "required": False, "schema": _point_rule},
    }

    _schema = {
        "circuit_name": {"type": "string", "required": False, "empty": False},
        "components": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _component_schema},
        },
        "wires": {
            "type": "list", "required": False, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _wire_schema},
        },
        "simulation": {
            "type": "dict", "required": False, "schema": {
                "time_step": {"type": ["string", "number"]},
                "speed": {"type": "number", "min": 0},
                "min_time_step": {"type": ["string", "number"]},
            },
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("CircuitFileParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedCircuitData:
        """Parses and validates one circuit file."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing circuit file: {resolved_path}")
        content = self._load_yaml(resolved_path)
        return self.parse_data(content, resolved_path)

    def parse_data(self, content: Dict[str, Any], source_path: Path) -> ParsedCircuitData:
        """Validates an already-loaded circuit mapping; `source_path` is used for diagnostics."""
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source_path)
        validated = self._validator.document

        components = [
            ParsedComponentData(
                instance_id=raw["id"],
                component_type=raw["type"],
                raw_parameters_dict=dict(raw.get("parameters", {})),
                source_yaml_path=source_path,
                position=self._as_point(raw.get("position")),
                rotation=float(raw.get("rotation", 0.0)),
            )
            for raw in validated["components"]
        ]
        wires = [
            ParsedWireData(
                wire_id=raw.get("id"),
                from_endpoint=raw["from"],
                to_endpoint=raw["to"],
                points=[self._as_point(p) for p in raw.get("points", [])],
            )
            for raw in validated.get("wires", [])
        ]
        logger.debug(f"Parsed {len(components)} component(s) and {len(wires)} wire(s) from {source_path}.")
        return ParsedCircuitData(
            circuit_name=validated.get("circuit_name", source_path.stem),
            source_yaml_path=source_path,
            components=components,
            wires=wires,
            raw_simulation_config=validated.get("simulation"),
        )

    @staticmethod
    def _as_point(raw) -> tuple:
        if not raw:
            return (0.0, 0.0, 0.0)
        coords = [float(c) for c in raw]
        return tuple(coords + [0.0] * (3 - len(coords)))

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Circuit file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
