"""Schema and ingestion exceptions."""


class SchemaLoadError(Exception):
    """Raised when a YAML file cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a document fails schema validation.

    Each entry of ``errors`` carries ``loc``, ``msg`` and ``type``, plus the
    ``component`` it belongs to, or None for document-level errors.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class IngestionError(Exception):
    """Raised when a component description is structurally broken.

    Examples are references to undefined states or a missing initial state.
    The protocol model cannot be built for that component.
    """

    def __init__(
        self, message: str, component: str | None = None, state: str | None = None
    ):
        self.component = component
        self.state = state
        super().__init__(message)
