from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

import pytest

from wiring.category import generator
from wiring.diagram.base import WiringDiagram
from wiring.diagram.connector import BoxId, Connector, ConnectorKind
from wiring.expr import Hom, Ob

X, Y, Z, W = Ob("X"), Ob("Y"), Ob("Z"), Ob("W")


@dataclass(frozen=True)
class _End:
    """One end of a wire, with the box id replaced by something that does not
    depend on the order boxes were added in.
    """

    box: object
    kind: ConnectorKind
    port: int

    @classmethod
    def of(cls, d: WiringDiagram, conn: Connector) -> _End:
        return cls(_box_label(d, conn.box), conn.kind, conn.port)


def _box_label(d: WiringDiagram, v: BoxId) -> object:
    if v == d.input_id:
        return "input"
    if v == d.output_id:
        return "output"
    # Atomic boxes are hashable and compare by their expression.
    return d.box(v)


def connectivity(d: WiringDiagram) -> Counter[tuple[_End, _End]]:
    """Multiset of the wires of a diagram, identifying boxes by their content.

    Two diagrams built from distinct generators are connectivity-equivalent
    when their boundaries agree and these multisets are equal.
    """
    return Counter(
        (_End.of(d, wire.source), _End.of(d, wire.target)) for wire in d.wires()
    )


def assert_equivalent(d1: WiringDiagram, d2: WiringDiagram) -> None:
    assert d1.dom() == d2.dom()
    assert d1.codom() == d2.codom()
    assert d1.nboxes() == d2.nboxes()
    assert connectivity(d1) == connectivity(d2)


@pytest.fixture
def f() -> WiringDiagram:
    return generator(Hom("f", [X], [Y]))


@pytest.fixture
def g() -> WiringDiagram:
    return generator(Hom("g", [Y], [Z]))


@pytest.fixture
def h() -> WiringDiagram:
    return generator(Hom("h", [Z], [W]))
