"""YAML loading and parsing for protocol documents."""

from pathlib import Path
from typing import IO

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import ProtocolDocument


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary. An empty file yields ``{}``.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.is_file():
        reason = "Not a file" if path.exists() else "File not found"
        raise SchemaLoadError(f"{reason}: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            return _read_mapping(f, str(path))
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e


def parse_document(path: str | Path) -> ProtocolDocument:
    """Load and parse a YAML file into a ProtocolDocument.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return _validate(load_yaml(path))


def parse_document_from_string(yaml_string: str) -> ProtocolDocument:
    """Parse a YAML string into a ProtocolDocument.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    return _validate(_read_mapping(yaml_string))


def _read_mapping(source: str | IO[str], origin: str | None = None) -> dict:
    """Parse YAML from text or a stream and require a mapping at the root."""
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", origin) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", origin
        )

    return data


def _validate(data: dict) -> ProtocolDocument:
    """Validate raw data, reporting errors against the component they belong to."""
    try:
        return ProtocolDocument.model_validate(data)
    except ValidationError as e:
        errors = [_describe_error(err) for err in e.errors()]
        components = sorted({err["component"] for err in errors if err["component"]})

        message = f"Schema validation failed with {len(errors)} error(s)"
        if components:
            message += f" in component(s): {', '.join(components)}"
        raise SchemaValidationError(message, errors) from e


def _describe_error(err: dict) -> dict:
    loc = err["loc"]
    component = None
    # Errors below a component look like ("components", <name>, ...)
    if len(loc) > 1 and loc[0] == "components":
        component = str(loc[1])

    return {
        "component": component,
        "loc": ".".join(str(x) for x in loc),
        "msg": err["msg"],
        "type": err["type"],
    }
