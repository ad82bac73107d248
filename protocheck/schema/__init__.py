"""Schema layer for parsing and validating protocol documents."""

from .errors import IngestionError, SchemaLoadError, SchemaValidationError
from .models import (
    ComponentSpec,
    FaultHandlerSpec,
    ProtocolDocument,
    StateSpec,
    TransitionSpec,
)
from .loader import load_yaml, parse_document, parse_document_from_string

__all__ = [
    "IngestionError",
    "SchemaLoadError",
    "SchemaValidationError",
    "ComponentSpec",
    "FaultHandlerSpec",
    "ProtocolDocument",
    "StateSpec",
    "TransitionSpec",
    "load_yaml",
    "parse_document",
    "parse_document_from_string",
]
