from collections.abc import Hashable
from typing import Generic, TypeVar

import networkx as nx  # type: ignore

from cartesian_import.geometry.point import FloatPoint

G = TypeVar("G", bound=nx.Graph)


class LayoutEngine(Generic[G]):
    def __call__(self, graph: G) -> dict[Hashable, FloatPoint]:
        return NotImplemented  # pragma: no cover
