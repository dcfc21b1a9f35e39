"""Boxes: the node payloads of a wiring diagram."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from wiring import expr as ex


@runtime_checkable
class Box(Protocol):
    """An arbitrary black box with (possibly empty) lists of input and output
    port types.
    """

    #: Types of the input ports of the box.
    inputs: list
    #: Types of the output ports of the box.
    outputs: list

    def name(self) -> str:
        """Name of the box, used for rendering."""
        return str(self)


@dataclass(frozen=True)
class AtomicBox(Box):
    """A box wrapping a morphism expression, often a generator.
    Atomic boxes have no internal structure.

    Example:
        >>> X, Y = ex.Ob("X"), ex.Ob("Y")
        >>> box = AtomicBox(ex.Hom("f", [X, X], [Y]))
        >>> box.inputs, box.outputs
        ([X, X], [Y])
    """

    expr: ex.HomExpr

    @property
    def inputs(self) -> list:
        return ex.dom(self.expr)

    @property
    def outputs(self) -> list:
        return ex.codom(self.expr)

    def name(self) -> str:
        return getattr(self.expr, "name", str(self.expr))
