"""Connector and wire classes for wiring diagrams."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Union

from typing_extensions import Self

if TYPE_CHECKING:
    from collections.abc import Iterator


class ConnectorKind(Enum):
    """Enum over the two sides of a box, INPUT and OUTPUT."""

    INPUT = 0
    OUTPUT = 1


BoxId = int
PortOffset = int

#: Shorthand for a connector: either a ``(box, port)`` pair or a
#: ``(box, kind, port)`` triple.
ConnectorSpec = Union[
    "Connector",
    tuple[BoxId, PortOffset],
    tuple[BoxId, ConnectorKind, PortOffset],
]


@dataclass(frozen=True, eq=True)
class Connector:
    """A single port of a box, defined by the `box` it belongs to, the side
    of the box and the port `offset`.

    Examples:
        >>> Connector(3, ConnectorKind.INPUT, 0)
        Connector(3, INPUT, 0)
    """

    box: BoxId
    kind: ConnectorKind
    port: PortOffset

    def with_box(self, box: BoxId) -> Self:
        """The connector for the same port on another box.

        Examples:
            >>> Connector(3, ConnectorKind.OUTPUT, 1).with_box(7)
            Connector(7, OUTPUT, 1)
        """
        return replace(self, box=box)

    def __repr__(self) -> str:
        return f"Connector({self.box}, {self.kind.name}, {self.port})"


def _to_connector(spec: ConnectorSpec, kind: ConnectorKind) -> Connector:
    match spec:
        case Connector():
            return spec
        case (box, ConnectorKind() as k, port):
            return Connector(box, k, port)
        case (box, port):
            return Connector(box, kind, port)
        case _:
            msg = f"Cannot interpret {spec!r} as a connector."
            raise TypeError(msg)


@dataclass(frozen=True, eq=True)
class Wire:
    """A directed link from a `source` connector to a `target` connector.

    No validation is done on construction: whether the wire makes sense is
    a property of the diagram it is added to.
    """

    source: Connector
    target: Connector

    @classmethod
    def from_ports(
        cls, src: tuple[BoxId, PortOffset], tgt: tuple[BoxId, PortOffset]
    ) -> Wire:
        """Wire from an output port of one box to an input port of another.

        Examples:
            >>> Wire.from_ports((0, 0), (1, 2))
            Wire(Connector(0, OUTPUT, 0) => Connector(1, INPUT, 2))
        """
        return cls(
            Connector(src[0], ConnectorKind.OUTPUT, src[1]),
            Connector(tgt[0], ConnectorKind.INPUT, tgt[1]),
        )

    @classmethod
    def from_triples(
        cls,
        src: tuple[BoxId, ConnectorKind, PortOffset],
        tgt: tuple[BoxId, ConnectorKind, PortOffset],
    ) -> Wire:
        """Wire between two explicitly given connectors."""
        return cls(Connector(*src), Connector(*tgt))

    @classmethod
    def from_pair(cls, pair: tuple[ConnectorSpec, ConnectorSpec]) -> Wire:
        """Wire from a ``(source, target)`` pair, where each side is a
        connector, a ``(box, port)`` pair or a ``(box, kind, port)`` triple.

        Examples:
            >>> Wire.from_pair(((0, 1), (2, ConnectorKind.INPUT, 0)))
            Wire(Connector(0, OUTPUT, 1) => Connector(2, INPUT, 0))
        """
        src, tgt = pair
        return cls(
            _to_connector(src, ConnectorKind.OUTPUT),
            _to_connector(tgt, ConnectorKind.INPUT),
        )

    def boxes(self) -> Iterator[BoxId]:
        """The source and target box of the wire."""
        yield self.source.box
        yield self.target.box

    def __repr__(self) -> str:
        return f"Wire({self.source} => {self.target})"
