"""`wiring` is a Python package for wiring diagrams, a graph-based
representation of morphisms in symmetric monoidal categories.
"""

from .boxes import AtomicBox, Box
from .category import braid, codom, compose, dom, generator, id, munit, otimes
from .diagram.base import WiringDiagram
from .diagram.connector import BoxId, Connector, ConnectorKind, Wire
from .expr import Hom, Ob, ObProduct
from .types import WireTypes

__all__ = [
    "AtomicBox",
    "Box",
    "BoxId",
    "Connector",
    "ConnectorKind",
    "Hom",
    "Ob",
    "ObProduct",
    "Wire",
    "WireTypes",
    "WiringDiagram",
    "braid",
    "codom",
    "compose",
    "dom",
    "generator",
    "id",
    "munit",
    "otimes",
]

__version__ = "0.1.0"
