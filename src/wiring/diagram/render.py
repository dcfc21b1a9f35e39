"""Visualise wiring diagrams using graphviz."""

from dataclasses import dataclass, field
from html import escape

import graphviz as gv  # type: ignore[import-untyped]
from graphviz import Digraph
from typing_extensions import assert_never

from wiring.validate import port_types

from .base import WiringDiagram
from .connector import BoxId, Connector, ConnectorKind, Wire


@dataclass(frozen=True)
class Palette:
    """A set of colours used for rendering."""

    background: str
    box: str
    nested_box: str
    boundary: str
    wire: str
    dark: str
    port_border: str

    @classmethod
    def named(cls, name: str) -> "Palette":
        return PALETTE[name]


PALETTE: dict[str, Palette] = {
    "default": Palette(
        background="white",
        box="#ACCBF9",
        nested_box="#77CEEF",
        boundary="#F4A261",
        wire="#1CADE4",
        dark="black",
        port_border="#1CADE4",
    ),
    "nb": Palette(
        background="white",
        box="#7952B3",
        nested_box="#7c55b4",
        boundary="#00CFC1",
        wire="#FFC107",
        dark="#343A40",
        port_border="#ffd966",
    ),
    "zx": Palette(
        background="white",
        box="#629DD1",
        nested_box="#a1eea1",
        boundary="#FF8243",
        wire="#297FD5",
        dark="#112D4E",
        port_border="#E8A5A5",
    ),
}


@dataclass
class RenderConfig:
    """Configuration for rendering a wiring diagram with graphviz."""

    #: The palette to use for rendering. See :obj:`PALETTE` for the included options.
    palette: Palette = field(default_factory=lambda: PALETTE["default"])
    #: If true label each wire with the type of its source port.
    show_types: bool = True
    #: Graphviz rank direction, "TB" draws inputs on top and outputs below.
    rankdir: str = "TB"


class DotRenderer:
    """Render a wiring diagram to a graphviz dot file.

    Only the boxes, the wires and the two boundary boxes are visited; no
    layout is computed here.

    Args:
        config: Render config
    """

    config: RenderConfig

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, diagram: WiringDiagram) -> Digraph:
        """Render a wiring diagram to a graphviz dot object."""
        graph_attr = {
            "rankdir": self.config.rankdir,
            "ranksep": "0.1",
            "nodesep": "0.15",
            "margin": "0",
            "bgcolor": self.config.palette.background,
        }
        graph = gv.Digraph("wiring_diagram", strict=False)
        graph.attr(**graph_attr)

        self._viz_boundary(diagram.input_id, "inputs", [], diagram.inputs, graph)
        self._viz_boundary(diagram.output_id, "outputs", diagram.outputs, [], graph)
        for v in diagram.box_ids():
            self._viz_box(v, diagram, graph)

        for wire in diagram.wires():
            self._viz_wire(wire, diagram, graph)

        return graph

    def store(self, diagram: WiringDiagram, filename: str, format: str = "svg") -> None:
        """Render a wiring diagram and save it to a file.

        Args:
            diagram: The diagram to render.
            filename: Filename for saving the rendered graph.
            format: The format used for rendering ('pdf', 'png', etc.).
                Defaults to SVG.
        """
        gv_graph = self.render(diagram)
        gv_graph.render(filename, format=format)

    _FONTFACE = "monospace"

    # Graphviz HTML-like labels. A box is a table with an optional row of
    # input port cells, the box label, and an optional row of output ports.
    _BOX_TEMPLATE = (
        '<TABLE BORDER="{border}" CELLBORDER="0" CELLSPACING="1" CELLPADDING="1"'
        ' BGCOLOR="{fill}" COLOR="{border_colour}">'
        "{inputs_row}"
        '<TR><TD><FONT POINT-SIZE="11.0" FACE="{font}" COLOR="{text}">'
        "<B>{label}</B></FONT></TD></TR>"
        "{outputs_row}"
        "</TABLE>"
    )

    _PORTS_TEMPLATE = (
        '<TR><TD><TABLE BORDER="0" CELLBORDER="1" CELLSPACING="3"'
        ' CELLPADDING="2" COLOR="{port_border}"><TR>{cells}</TR></TABLE>'
        "</TD></TR>"
    )

    _PORT_TEMPLATE = (
        '<TD PORT="{port_id}" BGCOLOR="{fill}">'
        '<FONT POINT-SIZE="10.0" FACE="{font}" COLOR="{text}">{port}</FONT></TD>'
    )

    _INPUT_PREFIX = "in."
    _OUTPUT_PREFIX = "out."

    def _html_label(
        self,
        label: str,
        inputs: list,
        outputs: list,
        *,
        fill: str,
        border_colour: str,
        border: int = 1,
    ) -> str:
        return self._BOX_TEMPLATE.format(
            border=border,
            fill=fill,
            border_colour=border_colour,
            font=self._FONTFACE,
            text=self.config.palette.dark,
            label=label,
            inputs_row=self._ports_row(len(inputs), self._INPUT_PREFIX),
            outputs_row=self._ports_row(len(outputs), self._OUTPUT_PREFIX),
        )

    def _ports_row(self, num_ports: int, prefix: str) -> str:
        if num_ports == 0:
            return ""
        palette = self.config.palette
        cells = "".join(
            self._PORT_TEMPLATE.format(
                port_id=f"{prefix}{i}",
                fill=palette.background,
                font=self._FONTFACE,
                text=palette.dark,
                port=i,
            )
            for i in range(num_ports)
        )
        return self._PORTS_TEMPLATE.format(
            port_border=palette.port_border, cells=cells
        )

    def _connector_name(self, conn: Connector) -> str:
        match conn.kind:
            case ConnectorKind.INPUT:
                prefix = self._INPUT_PREFIX
            case ConnectorKind.OUTPUT:
                prefix = self._OUTPUT_PREFIX
            case _:
                assert_never(conn.kind)
        return f"{conn.box}:{prefix}{conn.port}"

    def _viz_boundary(
        self, v: BoxId, label: str, inputs: list, outputs: list, graph: Digraph
    ) -> None:
        html_label = self._html_label(
            label,
            inputs,
            outputs,
            fill=self.config.palette.background,
            border_colour=self.config.palette.boundary,
            border=2,
        )
        graph.node(f"{v}", label=f"<{html_label}>", shape="plain")

    def _viz_box(self, v: BoxId, diagram: WiringDiagram, graph: Digraph) -> None:
        box = diagram.box(v)
        fill = (
            self.config.palette.nested_box
            if isinstance(box, WiringDiagram)
            else self.config.palette.box
        )
        html_label = self._html_label(
            escape(box.name()),
            box.inputs,
            box.outputs,
            fill=fill,
            border_colour=self.config.palette.background,
        )
        graph.node(f"{v}", label=f"<{html_label}>", shape="plain")

    def _port_type(self, diagram: WiringDiagram, conn: Connector) -> object | None:
        types = port_types(diagram, conn)
        return types[conn.port] if 0 <= conn.port < len(types) else None

    def _viz_wire(self, wire: Wire, diagram: WiringDiagram, graph: Digraph) -> None:
        edge_attr = {
            "penwidth": "1.5",
            "arrowhead": "none",
            "arrowsize": "1.0",
            "fontname": self._FONTFACE,
            "fontsize": "9",
            "fontcolor": "black",
        }

        label = ""
        if self.config.show_types:
            ty = self._port_type(diagram, wire.source)
            label = "" if ty is None else str(ty)

        graph.edge(
            self._connector_name(wire.source),
            self._connector_name(wire.target),
            label=label,
            color=self.config.palette.wire,
            **edge_attr,
        )
