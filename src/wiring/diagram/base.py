"""Core data structure for wiring diagrams.

A wiring diagram is a graphical representation of a morphism in a monoidal
category. It is intermediate between a morphism (as a mathematical entity)
and an expression in the textual syntax: a single morphism may be
represented by many wiring diagrams, and a single wiring diagram may be
represented by many syntactic expressions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from copy import deepcopy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from typing_extensions import Self

from wiring.boxes import AtomicBox, Box
from wiring.exceptions import BoundaryBoxRemoval, WireNotFound
from wiring.expr import HomExpr, Ob, collect
from wiring.types import WireTypes

from .connector import BoxId, Connector, ConnectorKind, ConnectorSpec, Wire

if TYPE_CHECKING:
    import graphviz as gv  # type: ignore[import-untyped]

    from .render import RenderConfig

logger = logging.getLogger(__name__)

_Edge = tuple[BoxId, BoxId]

#: Anything accepted by :meth:`WiringDiagram.add_wire`.
ToWire = Union[Wire, tuple[ConnectorSpec, ConnectorSpec]]


@dataclass(eq=False)
class WiringDiagram(Box):
    """A wiring diagram: a directed multigraph of boxes connected by wires
    between their ports.

    The diagram's own inputs and outputs are represented by two boundary
    boxes, :attr:`input_id` and :attr:`output_id`. The *output* ports of the
    input box are the inputs of the diagram, and the *input* ports of the
    output box are the outputs of the diagram.

    A wiring diagram is itself a :class:`Box`, so diagrams can be nested
    and later flattened with :meth:`substitute`.

    Args:
        inputs: Types of the input ports of the diagram, as a row of types or
            an object expression such as `X @ Y`.
        outputs: Types of the output ports of the diagram.

    Examples:
        >>> X = expr.Ob("X")
        >>> d = WiringDiagram([X], [X])
        >>> d.input_id, d.output_id
        (0, 1)
        >>> d.add_wire(((d.input_id, 0), (d.output_id, 0)))
        >>> d.wires()
        [Wire(Connector(0, OUTPUT, 0) => Connector(1, INPUT, 0))]
    """

    #: Types of the input ports of the diagram.
    inputs: list
    #: Types of the output ports of the diagram.
    outputs: list
    #: Boundary box whose output ports are the inputs of the diagram.
    input_id: BoxId
    #: Boundary box whose input ports are the outputs of the diagram.
    output_id: BoxId
    # Boxes by id, in creation order. Boundary boxes have no entry.
    _boxes: dict[BoxId, Box]
    # Wires keyed by (source box, target box). Lists are never empty.
    _wires: dict[_Edge, list[Wire]]
    # Adjacency, as insertion ordered sets of neighbours, for every live box.
    _succ: dict[BoxId, dict[BoxId, None]]
    _pred: dict[BoxId, dict[BoxId, None]]
    # Next fresh box id. Ids are never reused.
    _next_id: BoxId

    def __init__(self, inputs: Ob | Iterable, outputs: Ob | Iterable) -> None:
        self.inputs = collect(inputs)
        self.outputs = collect(outputs)
        self._boxes = {}
        self._wires = {}
        self._succ = {}
        self._pred = {}
        self._next_id = 0
        self.input_id = self._add_vertex()
        self.output_id = self._add_vertex()

    def _add_vertex(self) -> BoxId:
        v = self._next_id
        self._next_id += 1
        self._succ[v] = {}
        self._pred[v] = {}
        return v

    def name(self) -> str:
        return f"{self.dom()} -> {self.codom()}"

    def __repr__(self) -> str:
        return (
            f"WiringDiagram({self.name()},"
            f" boxes={self.nboxes()}, wires={self.nwires()})"
        )

    def __getitem__(self, v: BoxId) -> Box:
        return self.box(v)

    def dom(self) -> WireTypes:
        """The input types of the diagram as an object of the category."""
        return WireTypes(self.inputs)

    def codom(self) -> WireTypes:
        """The output types of the diagram as an object of the category."""
        return WireTypes(self.outputs)

    def is_boundary(self, v: BoxId) -> bool:
        """Whether `v` is one of the two boundary boxes."""
        return v == self.input_id or v == self.output_id

    # Basic accessors.

    def box(self, v: BoxId) -> Box:
        """The box with id `v`.

        Raises:
            KeyError: If `v` is not a box of the diagram. The boundary boxes
                carry no box and also raise.
        """
        return self._boxes[v]

    def boxes(self) -> list[Box]:
        """All boxes of the diagram, excluding the boundary, in creation
        order.
        """
        return list(self._boxes.values())

    def box_ids(self) -> list[BoxId]:
        """Ids of all boxes of the diagram, excluding the boundary, in
        creation order.
        """
        return list(self._boxes)

    def nboxes(self) -> int:
        """The number of boxes, excluding the boundary.

        Examples:
            >>> d = WiringDiagram([], [])
            >>> d.nboxes()
            0
        """
        return len(self._boxes)

    def wires(
        self, src: BoxId | None = None, tgt: BoxId | None = None
    ) -> list[Wire]:
        """Wires of the diagram.

        With no arguments, all the wires. With a `src` and `tgt` box, the
        wires from the first to the second, in insertion order; empty if
        there are none.
        """
        if src is None and tgt is None:
            return [wire for ws in self._wires.values() for wire in ws]
        if src is None or tgt is None:
            msg = "Both source and target boxes must be given."
            raise ValueError(msg)
        return list(self._wires.get((src, tgt), []))

    def nwires(self) -> int:
        """The total number of wires."""
        return sum(len(ws) for ws in self._wires.values())

    def has_wire(self, src: BoxId, tgt: BoxId) -> bool:
        """Whether there is at least one wire from box `src` to box `tgt`."""
        return (src, tgt) in self._wires

    def graph(self) -> Mapping[BoxId, tuple[BoxId, ...]]:
        """The underlying directed graph, as a mapping from every box id
        (boundary included) to the ids of its successors.

        The result is a snapshot. All mutations should pass through the
        diagram methods: :meth:`add_box`, :meth:`rem_box`, etc.
        """
        return {v: tuple(succ) for v, succ in self._succ.items()}

    # Graph mutation.

    def add_box(self, box: Box | HomExpr) -> BoxId:
        """Add a box to the diagram. A bare morphism expression is wrapped in
        an :class:`AtomicBox`.

        Returns:
            Id of the added box.

        Raises:
            TypeError: If `box` is neither a box nor a morphism expression.
        """
        if not isinstance(box, Box):
            if not isinstance(box, HomExpr):
                msg = f"Cannot add {box!r} as a box."
                raise TypeError(msg)
            box = AtomicBox(box)
        v = self._add_vertex()
        self._boxes[v] = box
        return v

    def add_boxes(self, boxes: Iterable[Box | HomExpr]) -> list[BoxId]:
        """Add several boxes, see :meth:`add_box`."""
        return [self.add_box(box) for box in boxes]

    def rem_box(self, v: BoxId) -> Box:
        """Remove a box and all wires attached to it.

        Returns:
            The removed box.

        Raises:
            BoundaryBoxRemoval: If `v` is a boundary box.
            KeyError: If `v` is not a box of the diagram.
        """
        if self.is_boundary(v):
            raise BoundaryBoxRemoval(v)
        box = self._boxes.pop(v)
        for u in self._succ.pop(v):
            self._wires.pop((v, u), None)
            self._pred.get(u, {}).pop(v, None)
        for u in self._pred.pop(v):
            self._wires.pop((u, v), None)
            self._succ.get(u, {}).pop(v, None)
        return box

    def add_wire(self, wire: ToWire) -> None:
        """Add a wire, given as a :class:`Wire` or as a ``(source, target)``
        pair (see :meth:`Wire.from_pair`).

        Port types are not checked, see :func:`wiring.validate.validate`.

        Raises:
            KeyError: If either end of the wire is not a box of the diagram.
        """
        if not isinstance(wire, Wire):
            wire = Wire.from_pair(wire)
        src, tgt = wire.source.box, wire.target.box
        if src not in self._succ:
            raise KeyError(src)
        if tgt not in self._pred:
            raise KeyError(tgt)
        self._succ[src][tgt] = None
        self._pred[tgt][src] = None
        self._wires.setdefault((src, tgt), []).append(wire)

    def add_wires(self, wires: Iterable[ToWire]) -> None:
        """Add several wires, see :meth:`add_wire`."""
        for wire in wires:
            self.add_wire(wire)

    def rem_wire(self, wire: ToWire) -> None:
        """Remove the first wire equal to `wire`. When the last wire between
        two boxes is removed, so is the edge between them.

        Raises:
            WireNotFound: If the wire is not in the diagram.
        """
        if not isinstance(wire, Wire):
            wire = Wire.from_pair(wire)
        edge = (wire.source.box, wire.target.box)
        try:
            self._wires.get(edge, []).remove(wire)
        except ValueError:
            raise WireNotFound(wire) from None
        if not self._wires[edge]:
            self._rem_edge(edge)

    def rem_wires(self, src: BoxId, tgt: BoxId) -> None:
        """Remove all wires from box `src` to box `tgt`.

        Raises:
            KeyError: If there are no such wires.
        """
        self._rem_edge((src, tgt))

    def _rem_edge(self, edge: _Edge) -> None:
        src, tgt = edge
        del self._wires[edge]
        del self._succ[src][tgt]
        del self._pred[tgt][src]

    # Graph properties.

    def all_neighbors(self, v: BoxId) -> list[BoxId]:
        """Boxes connected to `v` by a wire in either direction."""
        return list(dict.fromkeys([*self._pred[v], *self._succ[v]]))

    def neighbors(self, v: BoxId) -> list[BoxId]:
        """Alias of :meth:`out_neighbors`."""
        return self.out_neighbors(v)

    def out_neighbors(self, v: BoxId) -> list[BoxId]:
        """Boxes with a wire coming from `v`."""
        return list(self._succ[v])

    def in_neighbors(self, v: BoxId) -> list[BoxId]:
        """Boxes with a wire going into `v`."""
        return list(self._pred[v])

    def in_wires(self, conn: Connector) -> list[Wire]:
        """All wires coming into the connector.

        Examples:
            >>> d = WiringDiagram(["X"], ["X", "X"])
            >>> d.add_wires([((0, 0), (1, 0)), ((0, 0), (1, 1))])
            >>> d.in_wires(Connector(1, ConnectorKind.INPUT, 1))
            [Wire(Connector(0, OUTPUT, 0) => Connector(1, INPUT, 1))]
        """
        return [
            wire
            for u in self.in_neighbors(conn.box)
            for wire in self._wires[(u, conn.box)]
            if wire.target == conn
        ]

    def out_wires(self, conn: Connector) -> list[Wire]:
        """All wires coming out of the connector."""
        return [
            wire
            for u in self.out_neighbors(conn.box)
            for wire in self._wires[(conn.box, u)]
            if wire.source == conn
        ]

    # Diagram substitution.

    def substitute(
        self, v: BoxId, sub: WiringDiagram | None = None
    ) -> Self:
        """Substitute the box `v` with the wiring diagram `sub`.

        This operation is the operadic composition of wiring diagrams: the
        boxes of `sub` are copied into this diagram, the wires of `sub` are
        spliced onto whatever was connected to the ports of `v`, and `v` is
        removed. Nested diagrams among the boxes of `sub` are deep copied, so
        the two diagrams share no mutable state afterwards.

        If `sub` is omitted, the box stored at `v` is substituted into its
        own place. An atomic box has no internal structure, so in that case
        the diagram is left unchanged.

        Args:
            v: Box to replace.
            sub: Diagram to insert in its place. Its input (output) ports
                correspond to the input (output) ports of `v`.

        Returns:
            This diagram.

        Examples:
            >>> X = expr.Ob("X")
            >>> inner = WiringDiagram([X], [X])
            >>> g = inner.add_box(expr.Hom("g", [X], [X]))
            >>> inner.add_wires([((inner.input_id, 0), (g, 0)),
            ...                  ((g, 0), (inner.output_id, 0))])
            >>> outer = WiringDiagram([X], [X])
            >>> v = outer.add_box(inner)
            >>> outer.add_wires([((outer.input_id, 0), (v, 0)),
            ...                  ((v, 0), (outer.output_id, 0))])
            >>> outer.substitute(v).boxes()
            [AtomicBox(expr=Hom(g: X -> X))]
        """
        box = self.box(v)
        if sub is None:
            if not isinstance(box, WiringDiagram):
                logger.debug("Box %d is atomic, nothing to substitute", v)
                return self
            sub = box

        # Add new boxes from the sub-diagram. Nested diagrams are copied.
        sub_map: dict[BoxId, BoxId] = {}
        for u in sub.box_ids():
            child = sub.box(u)
            if isinstance(child, WiringDiagram):
                child = deepcopy(child)
            sub_map[u] = self.add_box(child)
        logger.debug("Substituting box %d, inserted boxes %s", v, sub_map)

        # Add new wires from the sub-diagram.
        for wire in sub.wires():
            src, tgt = wire.source, wire.target
            from_input = src.box == sub.input_id
            to_output = tgt.box == sub.output_id
            if from_input and to_output:
                # Pass-through: connect every source feeding the input port
                # of v to every target fed by the output port of v.
                in_wires = self.in_wires(Connector(v, ConnectorKind.INPUT, src.port))
                out_wires = self.out_wires(
                    Connector(v, ConnectorKind.OUTPUT, tgt.port)
                )
                for in_wire in in_wires:
                    for out_wire in out_wires:
                        self.add_wire(Wire(in_wire.source, out_wire.target))
            elif from_input:
                new_tgt = tgt.with_box(sub_map[tgt.box])
                for in_wire in self.in_wires(
                    Connector(v, ConnectorKind.INPUT, src.port)
                ):
                    self.add_wire(Wire(in_wire.source, new_tgt))
            elif to_output:
                new_src = src.with_box(sub_map[src.box])
                for out_wire in self.out_wires(
                    Connector(v, ConnectorKind.OUTPUT, tgt.port)
                ):
                    self.add_wire(Wire(new_src, out_wire.target))
            else:
                new_src = src.with_box(sub_map[src.box])
                new_tgt = tgt.with_box(sub_map[tgt.box])
                self.add_wire(Wire(new_src, new_tgt))

        # Remove the original box.
        self.rem_box(v)
        return self

    # Categorical structure, see :mod:`wiring.category`.

    def __rshift__(self, other: Box) -> WiringDiagram:
        """Sequential composition, see :func:`wiring.category.compose`."""
        from wiring.category import compose

        return compose(self, other)

    def __matmul__(self, other: Box) -> WiringDiagram:
        """Parallel composition, see :func:`wiring.category.otimes`."""
        from wiring.category import otimes

        return otimes(self, other)

    # Rendering.

    def render_dot(self, config: RenderConfig | None = None) -> gv.Digraph:
        """Render the diagram to a graphviz Digraph.

        Args:
            config: Render configuration.

        Returns:
            The graphviz Digraph.
        """
        from .render import DotRenderer

        return DotRenderer(config).render(self)

    def store_dot(
        self, filename: str, format: str = "svg", config: RenderConfig | None = None
    ) -> None:
        """Render the diagram to a file with graphviz.

        Args:
            filename: The file to render to.
            format: The format used for rendering ('pdf', 'png', etc.).
                Defaults to SVG.
            config: Render configuration.
        """
        from .render import DotRenderer

        DotRenderer(config).store(self, filename=filename, format=format)
