from __future__ import annotations

import graphviz as gv  # type: ignore[import-untyped]

from wiring.category import compose, generator, id
from wiring.diagram.base import WiringDiagram
from wiring.diagram.render import PALETTE, DotRenderer, Palette, RenderConfig
from wiring.expr import Hom

from .conftest import X, Y


def _node_lines(graph: gv.Digraph) -> list[str]:
    return [line for line in graph.body if "shape=plain" in line]


def _edge_lines(graph: gv.Digraph) -> list[str]:
    return [line for line in graph.body if " -> " in line]


def test_render_boxes_and_wires(f, g):
    d = compose(f, g)
    graph = d.render_dot()
    assert isinstance(graph, gv.Digraph)
    # one node per box plus the two boundary boxes
    assert len(_node_lines(graph)) == d.nboxes() + 2
    assert len(_edge_lines(graph)) == d.nwires()
    a, b = d.box_ids()
    assert any(
        line.strip().startswith(f"{a}:") and f"-> {b}:" in line
        for line in _edge_lines(graph)
    )
    assert "<B>f</B>" in graph.source
    assert "<B>g</B>" in graph.source


def test_render_types():
    d = id([X])
    source = d.render_dot().source
    assert 'label=X' in source or 'label="X"' in source

    plain = d.render_dot(RenderConfig(show_types=False)).source
    assert 'label=X' not in plain and 'label="X"' not in plain


def test_render_nested_box():
    inner = generator(Hom("f", [X], [Y]))
    d = generator(inner)
    source = d.render_dot().source
    # diagram names are escaped inside html labels
    assert "[X] -&gt; [Y]" in source
    assert PALETTE["default"].nested_box in source


def test_render_unconnected_port():
    d = WiringDiagram([X], [X])
    d.add_wire(((d.input_id, 3), (d.output_id, 0)))
    assert len(_edge_lines(d.render_dot())) == 1


def test_palette():
    config = RenderConfig(palette=Palette.named("zx"), rankdir="LR")
    source = DotRenderer(config).render(id([X])).source
    assert PALETTE["zx"].wire in source
    assert "rankdir=LR" in source


def test_store(tmp_path, monkeypatch):
    rendered = {}

    def fake_render(self, filename, format):
        rendered["filename"] = filename
        rendered["format"] = format

    monkeypatch.setattr(gv.Digraph, "render", fake_render)
    id([X]).store_dot(str(tmp_path / "diagram"), format="png")
    assert rendered == {"filename": str(tmp_path / "diagram"), "format": "png"}
