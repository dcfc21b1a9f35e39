"""Symbolic object and morphism generators.

Atomic boxes in a wiring diagram wrap a morphism expression. The diagram
only ever asks an expression for its domain and codomain, see
:class:`HomExpr`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from wiring.utils import comma_sep_str


@dataclass(frozen=True, order=True)
class Ob:
    """A generating object, identified by its `name`.

    Example:
        >>> Ob("X")
        X
    """

    name: str

    def __matmul__(self, other: Ob | ObProduct) -> ObProduct:
        return ObProduct(self, other)

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, init=False)
class ObProduct:
    """Monoidal product of generating objects. Nested products are
    flattened, and the empty product is the monoidal unit.

    Example:
        >>> X, Y = Ob("X"), Ob("Y")
        >>> X @ (Y @ X)
        X @ Y @ X
        >>> list(X @ Y)
        [X, Y]
        >>> ObProduct()
        I
    """

    factors: tuple[Ob, ...]

    def __init__(self, *factors: Ob | ObProduct) -> None:
        flat: list[Ob] = []
        for factor in factors:
            if isinstance(factor, ObProduct):
                flat.extend(factor.factors)
            else:
                flat.append(factor)
        object.__setattr__(self, "factors", tuple(flat))

    def __iter__(self) -> Iterator[Ob]:
        return iter(self.factors)

    def __len__(self) -> int:
        return len(self.factors)

    def __matmul__(self, other: Ob | ObProduct) -> ObProduct:
        return ObProduct(self, other)

    def __repr__(self) -> str:
        return " @ ".join(map(str, self.factors)) if self.factors else "I"


def collect(obs: Ob | Iterable) -> list:
    """The factors of an object expression as a list of port types.

    A generator is a row of one. Any other iterable, products included, is
    read factor by factor.

    Example:
        >>> X, Y = Ob("X"), Ob("Y")
        >>> collect(X), collect(X @ Y), collect([Y])
        ([X], [X, Y], [Y])
    """
    if isinstance(obs, Ob):
        return [obs]
    return list(obs)


@runtime_checkable
class HomExpr(Protocol):
    """A morphism expression with a domain and codomain."""

    @property
    def dom(self) -> Sequence[object]:
        """Input port types, in order."""
        ...  # pragma: no cover

    @property
    def codom(self) -> Sequence[object]:
        """Output port types, in order."""
        ...  # pragma: no cover


@dataclass(frozen=True, init=False)
class Hom(HomExpr):
    """A generating morphism with a `name`, domain and codomain.

    Example:
        >>> X, Y = Ob("X"), Ob("Y")
        >>> f = Hom("f", [X], [X, Y])
        >>> f
        Hom(f: X -> X, Y)
        >>> f.codom
        (X, Y)
    """

    name: str
    _dom: tuple[Ob, ...] = field(repr=False)
    _codom: tuple[Ob, ...] = field(repr=False)

    def __init__(
        self, name: str, dom: Ob | Iterable[Ob], codom: Ob | Iterable[Ob]
    ) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "_dom", tuple(collect(dom)))
        object.__setattr__(self, "_codom", tuple(collect(codom)))

    @property
    def dom(self) -> tuple[Ob, ...]:
        return self._dom

    @property
    def codom(self) -> tuple[Ob, ...]:
        return self._codom

    def __repr__(self) -> str:
        return f"Hom({self})"

    def __str__(self) -> str:
        dom, codom = comma_sep_str(self._dom), comma_sep_str(self._codom)
        return f"{self.name}: {dom} -> {codom}"


def dom(expr: HomExpr) -> list[object]:
    """Domain of a morphism expression, as a list of port types."""
    return list(expr.dom)


def codom(expr: HomExpr) -> list[object]:
    """Codomain of a morphism expression, as a list of port types."""
    return list(expr.codom)
