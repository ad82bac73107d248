"""Pydantic models for management protocol documents."""

from pydantic import BaseModel, Field, model_validator


def _as_list(value):
    """Wrap a scalar in a list, leaving lists and None alone."""
    if value is not None and not isinstance(value, list):
        return [value]
    return value


class StateSpec(BaseModel):
    """A state of a management protocol."""

    name: str
    initial: bool = False
    capabilities: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)


class TransitionSpec(BaseModel):
    """An operation-driven transition between states."""

    from_states: list[str] = Field(alias="from")
    to: str
    interface: str = ""
    operation: str
    requires: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_from_states(cls, data: dict) -> dict:
        """Normalize from to always be a list."""
        if isinstance(data, dict) and "from" in data:
            data["from"] = _as_list(data["from"])
        return data


class FaultHandlerSpec(BaseModel):
    """An author-declared recovery edge taken when requirements are lost."""

    from_states: list[str] = Field(alias="from")
    to: str

    @model_validator(mode="before")
    @classmethod
    def normalize_from_states(cls, data: dict) -> dict:
        """Normalize from to always be a list."""
        if isinstance(data, dict) and "from" in data:
            data["from"] = _as_list(data["from"])
        return data


class ComponentSpec(BaseModel):
    """The management protocol of one component type."""

    name: str = ""  # Will be set from the key
    capabilities: list[str] | None = None
    requirements: list[str] | None = None
    states: list[StateSpec] = Field(default_factory=list)
    transitions: list[TransitionSpec] = Field(default_factory=list)
    fault_handlers: list[FaultHandlerSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_component(cls, data: dict) -> dict:
        """Normalize states given as bare names and scalar vocabularies."""
        if not isinstance(data, dict):
            return data

        states = data.get("states", [])
        if states:
            data["states"] = [
                {"name": state} if isinstance(state, str) else state
                for state in states
            ]

        for key in ("capabilities", "requirements"):
            if key in data:
                data[key] = _as_list(data[key])

        return data


class ProtocolDocument(BaseModel):
    """Root model for a protocol YAML file."""

    components: dict[str, ComponentSpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_document(cls, data: dict) -> dict:
        """Set component names from keys."""
        if not isinstance(data, dict):
            return data

        components = data.get("components", {})
        if isinstance(components, dict):
            for name, component_data in components.items():
                if isinstance(component_data, dict):
                    component_data["name"] = name
                elif component_data is None:
                    components[name] = {"name": name}

        return data

    def get_component(self, name: str) -> ComponentSpec | None:
        """Get a component by name."""
        return self.components.get(name)

    def get_component_names(self) -> list[str]:
        """Get all component names."""
        return list(self.components.keys())
