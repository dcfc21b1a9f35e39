"""Optional type checking of the wires of a diagram.

Mutating a :class:`WiringDiagram` never checks port types or port
indices. Callers that want those guarantees run :func:`validate` on the
finished diagram.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wiring.diagram.connector import ConnectorKind
from wiring.exceptions import IncompatibleWire, PortOutOfRange

if TYPE_CHECKING:
    from wiring.diagram.base import WiringDiagram
    from wiring.diagram.connector import Connector, Wire


def port_types(diagram: WiringDiagram, conn: Connector) -> list:
    """The types of the ports on the side of the box `conn` refers to.

    For the boundary boxes the sides are flipped: the output ports of the
    input box are the diagram inputs and the input ports of the output box
    are the diagram outputs. The other side of a boundary box has no ports.
    """
    if conn.box == diagram.input_id:
        return diagram.inputs if conn.kind == ConnectorKind.OUTPUT else []
    if conn.box == diagram.output_id:
        return diagram.outputs if conn.kind == ConnectorKind.INPUT else []
    box = diagram.box(conn.box)
    return box.inputs if conn.kind == ConnectorKind.INPUT else box.outputs


def _port_type(diagram: WiringDiagram, conn: Connector) -> object:
    types = port_types(diagram, conn)
    if not 0 <= conn.port < len(types):
        raise PortOutOfRange(conn, len(types))
    return types[conn.port]


def check_wire(diagram: WiringDiagram, wire: Wire) -> None:
    """Check a single wire of `diagram`.

    Raises:
        PortOutOfRange: If either end refers to a port the box does not have,
            including a port on the inner side of a boundary box.
        IncompatibleWire: If the two ports have different types.
    """
    source_type = _port_type(diagram, wire.source)
    target_type = _port_type(diagram, wire.target)
    if source_type != target_type:
        raise IncompatibleWire(wire, source_type, target_type)


def validate(diagram: WiringDiagram) -> None:
    """Check every wire of `diagram`, raising on the first invalid one.

    Examples:
        >>> X, Y = expr.Ob("X"), expr.Ob("Y")
        >>> d = WiringDiagram([X], [Y])
        >>> d.add_wire(((d.input_id, 0), (d.output_id, 0)))
        >>> try:
        ...     validate(d)
        ... except IncompatibleWire as e:
        ...     print(e.msg)
        Wire(Connector(0, OUTPUT, 0) => Connector(1, INPUT, 0)) connects a port of type X to a port of type Y.
    """  # noqa: E501
    for wire in diagram.wires():
        check_wire(diagram, wire)
