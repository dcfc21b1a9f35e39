"""Wiring diagram exceptions."""

from __future__ import annotations

from dataclasses import dataclass

from .diagram.connector import BoxId, Connector, Wire


@dataclass
class BoundaryBoxRemoval(Exception):
    """Attempt to remove one of the boundary boxes of a diagram."""

    box: BoxId

    @property
    def msg(self) -> str:
        return (
            f"Box {self.box} is a boundary box of the diagram"
            " and cannot be removed."
        )


@dataclass
class WireNotFound(Exception):
    """Wire to be removed is not in the diagram."""

    wire: Wire

    @property
    def msg(self) -> str:
        return f"{self.wire} is not in the diagram."


@dataclass
class PortOutOfRange(Exception):
    """Connector refers to a port the box does not have."""

    connector: Connector
    num_ports: int

    @property
    def msg(self) -> str:
        return (
            f"{self.connector} is out of range,"
            f" box has {self.num_ports} {self.connector.kind.name.lower()} ports."
        )


@dataclass
class IncompatibleWire(Exception):
    """Wire connects ports of different types."""

    wire: Wire
    source_type: object
    target_type: object

    @property
    def msg(self) -> str:
        return (
            f"{self.wire} connects a port of type {self.source_type}"
            f" to a port of type {self.target_type}."
        )
