"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from protocheck.protocol.builder import build_protocol
from protocheck.schema.loader import parse_document_from_string


def protocol_from_yaml(yaml_string: str, component: str | None = None):
    """Parse a document and build the protocol of one of its components."""
    document = parse_document_from_string(yaml_string)
    name = component or document.get_component_names()[0]
    return build_protocol(document.components[name])


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def build():
    """Return a helper that builds a protocol from a YAML string."""
    return protocol_from_yaml


@pytest.fixture
def layered_yaml() -> str:
    """A chain of handlers, each dropping one requirement."""
    return """
components:
  Service:
    states:
      - name: A
        initial: true
        requirements: [r1, r2]
      - name: B
        requirements: [r2]
      - name: C
    fault_handlers:
      - from: A
        to: B
      - from: B
        to: C
"""


@pytest.fixture
def server_yaml() -> str:
    """A server with operations and a single recovery path."""
    return """
components:
  Server:
    capabilities: [endpoint]
    requirements: [host]
    states:
      - name: stopped
        initial: true
      - name: running
        capabilities: [endpoint]
        requirements: [host]
    transitions:
      - from: stopped
        to: running
        interface: lifecycle
        operation: start
        requires: [host]
      - from: running
        to: stopped
        interface: lifecycle
        operation: stop
    fault_handlers:
      - from: running
        to: stopped
"""


@pytest.fixture
def layered_protocol(layered_yaml):
    """Return the protocol built from the layered document."""
    return protocol_from_yaml(layered_yaml)


@pytest.fixture
def server_protocol(server_yaml):
    """Return the protocol built from the server document."""
    return protocol_from_yaml(server_yaml)
