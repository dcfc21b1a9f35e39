"""The main wiring diagram structure."""

from .base import WiringDiagram
from .connector import BoxId, Connector, ConnectorKind, Wire

__all__ = [
    "BoxId",
    "Connector",
    "ConnectorKind",
    "Wire",
    "WiringDiagram",
]
