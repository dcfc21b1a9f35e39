"""Testing setup."""

import pytest

from wiring import category, expr
from wiring.diagram import base, connector
from wiring.diagram.base import WiringDiagram
from wiring.diagram.connector import Connector, ConnectorKind, Wire
from wiring.types import WireTypes


@pytest.fixture(autouse=True)
def _add_wiring(doctest_namespace):
    doctest_namespace.update(
        {
            "base": base,
            "category": category,
            "connector": connector,
            "expr": expr,
            "Connector": Connector,
            "ConnectorKind": ConnectorKind,
            "Wire": Wire,
            "WireTypes": WireTypes,
            "WiringDiagram": WiringDiagram,
        }
    )
