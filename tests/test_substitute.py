from __future__ import annotations

import builtins
import logging

import pytest

from wiring.boxes import AtomicBox
from wiring.category import braid, generator, id
from wiring.diagram.base import WiringDiagram
from wiring.diagram.connector import Connector, ConnectorKind, Wire
from wiring.expr import Hom

from .conftest import X, Y, Z, assert_equivalent, connectivity

F = Hom("f", [X], [Y])
G = Hom("g", [Y], [Z])


def _chain() -> WiringDiagram:
    """X -> f -> g -> Z as a flat diagram."""
    d = WiringDiagram([X], [Z])
    a, b = d.add_boxes([F, G])
    d.add_wires(
        [
            ((d.input_id, 0), (a, 0)),
            ((a, 0), (b, 0)),
            ((b, 0), (d.output_id, 0)),
        ]
    )
    return d


def _host(sub: WiringDiagram) -> tuple[WiringDiagram, int]:
    """A diagram holding `sub` as its only box, wired port-for-port."""
    d = WiringDiagram(sub.inputs, sub.outputs)
    v = d.add_box(sub)
    d.add_wires(((d.input_id, i), (v, i)) for i in range(len(sub.inputs)))
    d.add_wires(((v, i), (d.output_id, i)) for i in range(len(sub.outputs)))
    return d, v


def test_inline_internal_boxes():
    inner = _chain()
    d, v = _host(inner)
    assert d.nboxes() == 1

    d.substitute(v, inner)
    assert d.nboxes() == 2
    assert d.boxes() == [AtomicBox(F), AtomicBox(G)]
    a, b = d.box_ids()
    assert v not in d.box_ids()
    assert d.wires() == [
        Wire.from_ports((d.input_id, 0), (a, 0)),
        Wire.from_ports((a, 0), (b, 0)),
        Wire.from_ports((b, 0), (d.output_id, 0)),
    ]
    assert_equivalent(d, inner)


def test_sub_diagram_untouched():
    inner = _chain()
    wires_before = inner.wires()
    d, v = _host(inner)
    d.substitute(v)
    assert inner.nboxes() == 2
    assert inner.wires() == wires_before


def test_nested_boxes_copied():
    nested = generator(F)
    inner = generator(nested)
    d, v = _host(inner)

    d.substitute(v)
    (u,) = d.box_ids()
    held = {builtins.id(box) for box in inner.boxes()}
    assert all(
        builtins.id(box) not in held
        for box in d.boxes()
        if isinstance(box, WiringDiagram)
    )
    assert d.box(u) is not nested
    assert_equivalent(d.box(u), nested)

    # mutating the copy leaves the inner diagram alone
    d.box(u).add_box(G)
    assert nested.nboxes() == 1
    assert inner.box(inner.box_ids()[0]) is nested


def test_self_substitution():
    inner = _chain()
    d, v = _host(inner)
    assert d.substitute(v) is d
    assert_equivalent(d, inner)


def test_atomic_self_substitution_is_noop():
    d = generator(F)
    (v,) = d.box_ids()
    wires = d.wires()
    d.substitute(v)
    assert d.box_ids() == [v]
    assert d.wires() == wires


def test_substitute_missing_box():
    d, _ = _host(_chain())
    with pytest.raises(KeyError):
        d.substitute(42, _chain())
    with pytest.raises(KeyError):
        d.substitute(d.input_id, _chain())
    assert d.nboxes() == 1


def test_pass_through_fan_out():
    # two sources feed the substituted box and two targets read from it
    d = WiringDiagram([X, X], [X, X])
    p1, p2, q1, q2 = (d.add_box(Hom(n, [X], [X])) for n in ("p1", "p2", "q1", "q2"))
    v = d.add_box(id([X]))
    d.add_wires(
        [
            ((d.input_id, 0), (p1, 0)),
            ((d.input_id, 1), (p2, 0)),
            ((p1, 0), (v, 0)),
            ((p2, 0), (v, 0)),
            ((v, 0), (q1, 0)),
            ((v, 0), (q2, 0)),
            ((q1, 0), (d.output_id, 0)),
            ((q2, 0), (d.output_id, 1)),
        ]
    )

    d.substitute(v)
    assert d.box_ids() == [p1, p2, q1, q2]
    assert d.nwires() == 8
    for p in (p1, p2):
        for q in (q1, q2):
            assert d.wires(p, q) == [Wire.from_ports((p, 0), (q, 0))]


def test_pass_through_without_source():
    d = WiringDiagram([X], [X])
    v = d.add_box(id([X]))
    # nothing feeds the input port of v
    d.add_wire(((v, 0), (d.output_id, 0)))

    d.substitute(v)
    assert d.nboxes() == 0
    assert d.nwires() == 0


def test_pass_through_ports():
    # braid swaps ports, which must be respected when splicing
    d = WiringDiagram([X, Y], [Y, X])
    v = d.add_box(braid([X], [Y]))
    d.add_wires(((d.input_id, i), (v, i)) for i in range(2))
    d.add_wires(((v, i), (d.output_id, i)) for i in range(2))

    d.substitute(v)
    assert sorted(
        (w.source.port, w.target.port) for w in d.wires(d.input_id, d.output_id)
    ) == [(0, 1), (1, 0)]


def test_port_numbers_preserved():
    m = Hom("m", [X, Y], [Y, X])
    inner = WiringDiagram([X, Y], [X, Y])
    b = inner.add_box(m)
    inner.add_wires(
        [
            ((inner.input_id, 0), (b, 0)),
            ((inner.input_id, 1), (b, 1)),
            ((b, 0), (inner.output_id, 1)),
            ((b, 1), (inner.output_id, 0)),
        ]
    )
    d, v = _host(inner)
    d.substitute(v)
    (nb,) = d.box_ids()
    assert d.in_wires(Connector(nb, ConnectorKind.INPUT, 1)) == [
        Wire.from_ports((d.input_id, 1), (nb, 1))
    ]
    assert d.out_wires(Connector(nb, ConnectorKind.OUTPUT, 0)) == [
        Wire.from_ports((nb, 0), (d.output_id, 1))
    ]
    assert connectivity(d) == connectivity(inner)


def test_nested_substitution_flattens_one_level():
    inner = _chain()
    middle, _ = _host(inner)
    d, v = _host(middle)

    d.substitute(v)
    (u,) = d.box_ids()
    assert d.box(u) is not inner
    assert_equivalent(d.box(u), inner)

    d.substitute(u)
    assert_equivalent(d, inner)


def test_substitute_logs(caplog):
    d, v = _host(_chain())
    with caplog.at_level(logging.DEBUG, logger="wiring.diagram.base"):
        d.substitute(v)
    assert f"Substituting box {v}" in caplog.text
