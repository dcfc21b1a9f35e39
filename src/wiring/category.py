"""Wiring diagrams as a symmetric monoidal category.

Objects are :class:`WireTypes` and morphisms are :class:`WiringDiagram`.
Every operator builds a small scaffold diagram whose boundary is wired to
one or two placeholder boxes, then substitutes the placeholders away.

Examples:
    >>> X, Y, Z = expr.Ob("X"), expr.Ob("Y"), expr.Ob("Z")
    >>> f = generator(expr.Hom("f", [X], [Y]))
    >>> g = generator(expr.Hom("g", [Y], [Z]))
    >>> h = compose(f, g)
    >>> dom(h), codom(h)
    (WireTypes([X]), WireTypes([Z]))
    >>> h.nboxes(), h.nwires()
    (2, 3)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, overload

from wiring.boxes import AtomicBox, Box
from wiring.diagram.base import WiringDiagram
from wiring.expr import HomExpr
from wiring.types import WireTypes

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "SymmetricMonoidalCategory",
    "WIRING",
    "braid",
    "codom",
    "compose",
    "dom",
    "generator",
    "id",
    "munit",
    "otimes",
]

logger = logging.getLogger(__name__)


class SymmetricMonoidalCategory(Protocol):
    """Operations of a symmetric monoidal category over objects of type
    :class:`WireTypes` and morphisms of type :class:`WiringDiagram`.

    The operations are expected to satisfy the laws of symmetric monoidal
    categories up to connectivity of the resulting diagrams.
    """

    def dom(self, f: Box) -> WireTypes: ...  # pragma: no cover

    def codom(self, f: Box) -> WireTypes: ...  # pragma: no cover

    def id(self, A: Iterable) -> WiringDiagram: ...  # pragma: no cover

    def compose(self, f: Box, g: Box) -> WiringDiagram: ...  # pragma: no cover

    @overload
    def otimes(self, f: WireTypes, g: WireTypes) -> WireTypes: ...
    @overload
    def otimes(
        self, f: Box | HomExpr, g: Box | HomExpr
    ) -> WiringDiagram: ...
    def otimes(
        self, f: WireTypes | Box | HomExpr, g: WireTypes | Box | HomExpr
    ) -> WireTypes | WiringDiagram: ...  # pragma: no cover

    def munit(self) -> WireTypes: ...  # pragma: no cover

    def braid(self, A: Iterable, B: Iterable) -> WiringDiagram:
        ...  # pragma: no cover


def _as_box(f: Box | HomExpr) -> Box:
    if isinstance(f, Box):
        return f
    return AtomicBox(f)


def dom(f: Box | HomExpr) -> WireTypes:
    """Input types of a diagram or box."""
    return WireTypes(_as_box(f).inputs)


def codom(f: Box | HomExpr) -> WireTypes:
    """Output types of a diagram or box."""
    return WireTypes(_as_box(f).outputs)


def munit() -> WireTypes:
    """The monoidal unit, the empty row of types."""
    return WireTypes.empty()


def id(A: Iterable) -> WiringDiagram:  # noqa: A001
    """Identity diagram on `A`: each input port wired to the output port at
    the same position.

    Example:
        >>> d = id(["X", "Y"])
        >>> d.nboxes(), d.nwires()
        (0, 2)
    """
    A = WireTypes(A)
    f = WiringDiagram(A, A)
    f.add_wires(((f.input_id, i), (f.output_id, i)) for i in range(len(A)))
    return f


def generator(f: Box | HomExpr) -> WiringDiagram:
    """Diagram with the single box `f`, wired port-for-port to the boundary.

    Example:
        >>> X = expr.Ob("X")
        >>> d = generator(expr.Hom("f", [X, X], [X]))
        >>> d.nboxes(), d.nwires()
        (1, 3)
    """
    box = _as_box(f)
    h = WiringDiagram(box.inputs, box.outputs)
    v = h.add_box(box)
    h.add_wires(((h.input_id, i), (v, i)) for i in range(len(box.inputs)))
    h.add_wires(((v, i), (h.output_id, i)) for i in range(len(box.outputs)))
    return h


def compose(f: Box | HomExpr, g: Box | HomExpr) -> WiringDiagram:
    """Sequential composition, `f` then `g`.

    The codomain of `f` is assumed to match the domain of `g`; this is not
    checked. Diagram boxes are inlined, atomic boxes are kept as boxes.
    """
    f, g = _as_box(f), _as_box(g)
    h = WiringDiagram(dom(f), codom(g))
    fv = h.add_box(f)
    gv = h.add_box(g)
    h.add_wires(((h.input_id, i), (fv, i)) for i in range(len(dom(f))))
    h.add_wires(((fv, i), (gv, i)) for i in range(len(codom(f))))
    h.add_wires(((gv, i), (h.output_id, i)) for i in range(len(codom(g))))
    logger.debug("Composing %s with %s", f.name(), g.name())
    h.substitute(fv)
    h.substitute(gv)
    return h


@overload
def otimes(f: WireTypes, g: WireTypes) -> WireTypes: ...
@overload
def otimes(f: Box | HomExpr, g: Box | HomExpr) -> WiringDiagram: ...
def otimes(
    f: WireTypes | Box | HomExpr, g: WireTypes | Box | HomExpr
) -> WireTypes | WiringDiagram:
    """Monoidal product.

    On two rows of types, their concatenation. On diagrams or boxes, their
    parallel composition: `f` on the first ports and `g` on the rest.

    Example:
        >>> otimes(WireTypes(["X"]), WireTypes(["Y"]))
        WireTypes(['X', 'Y'])
    """
    if isinstance(f, WireTypes) and isinstance(g, WireTypes):
        return f @ g
    f, g = _as_box(f), _as_box(g)
    h = WiringDiagram(dom(f) @ dom(g), codom(f) @ codom(g))
    m, n = len(dom(f)), len(codom(f))
    fv = h.add_box(f)
    gv = h.add_box(g)
    h.add_wires(((h.input_id, i), (fv, i)) for i in range(len(dom(f))))
    h.add_wires(((h.input_id, i + m), (gv, i)) for i in range(len(dom(g))))
    h.add_wires(((fv, i), (h.output_id, i)) for i in range(len(codom(f))))
    h.add_wires(((gv, i), (h.output_id, i + n)) for i in range(len(codom(g))))
    logger.debug("Tensoring %s with %s", f.name(), g.name())
    h.substitute(fv)
    h.substitute(gv)
    return h


def braid(A: Iterable, B: Iterable) -> WiringDiagram:
    """Symmetry swapping `A` and `B`: the diagram from `A @ B` to `B @ A`.

    Example:
        >>> d = braid(["X"], ["Y", "Z"])
        >>> [(w.source.port, w.target.port) for w in d.wires()]
        [(0, 2), (1, 0), (2, 1)]
    """
    A, B = WireTypes(A), WireTypes(B)
    h = WiringDiagram(A @ B, B @ A)
    m, n = len(A), len(B)
    h.add_wires(((h.input_id, i), (h.output_id, i + n)) for i in range(m))
    h.add_wires(((h.input_id, i + m), (h.output_id, i)) for i in range(n))
    return h


class _WiringCategory:
    """Module functions bundled as a :class:`SymmetricMonoidalCategory`."""

    dom = staticmethod(dom)
    codom = staticmethod(codom)
    id = staticmethod(id)
    compose = staticmethod(compose)
    otimes = staticmethod(otimes)
    munit = staticmethod(munit)
    braid = staticmethod(braid)


#: The category of wiring diagrams.
WIRING: SymmetricMonoidalCategory = _WiringCategory()
