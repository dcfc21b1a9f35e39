"""Wire types: the objects of the category of wiring diagrams."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import overload

from wiring.expr import Ob, collect
from wiring.utils import comma_sep_repr, comma_sep_str

#: A port type. Any hashable value may be used, typically an :class:`Ob`.
PortType = Hashable


@dataclass(frozen=True, init=False)
class WireTypes(Sequence[PortType]):
    """Ordered row of port types. The position of a type in the row is the
    index of the port it describes.

    Examples:
        >>> A = WireTypes(["X", "Y"])
        >>> len(A)
        2
        >>> A[1]
        'Y'
        >>> A @ WireTypes(["Z"])
        WireTypes(['X', 'Y', 'Z'])
    """

    types: tuple[PortType, ...] = field()

    def __init__(self, types: Ob | Iterable[PortType] = ()) -> None:
        object.__setattr__(self, "types", tuple(collect(types)))

    @overload
    def __getitem__(self, index: int) -> PortType: ...
    @overload
    def __getitem__(self, index: slice) -> WireTypes: ...
    def __getitem__(self, index: int | slice) -> PortType | WireTypes:
        if isinstance(index, slice):
            return WireTypes(self.types[index])
        return self.types[index]

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self) -> Iterator[PortType]:
        return iter(self.types)

    def __matmul__(self, other: WireTypes) -> WireTypes:
        """Monoidal product, the concatenation of the two rows."""
        return WireTypes(self.types + tuple(other))

    @classmethod
    def empty(cls) -> WireTypes:
        """The empty row, the monoidal unit.

        Example:
            >>> WireTypes.empty()
            WireTypes([])
        """
        return cls()

    def to_list(self) -> list[PortType]:
        return list(self.types)

    def __repr__(self) -> str:
        return f"WireTypes([{comma_sep_repr(self.types)}])"

    def __str__(self) -> str:
        return f"[{comma_sep_str(self.types)}]"
