from collections.abc import Callable, Hashable
from contextlib import AbstractContextManager
from typing import Any

import networkx as nx  # type: ignore

from cartesian_import.graph.columns import Column, NodeTable
from cartesian_import.graph.locking import ReadWriteLock

NodeFilter = Callable[[Hashable], bool]


class Node:
    """A node of the visible graph.

    The position is kept in the node data under ``$x`` and ``$y``, the same
    keys a static layout reads positions from.
    """

    __slots__ = ("id", "_data")

    def __init__(self, node_id: Hashable, data: dict[Hashable, Any]):
        self.id = node_id
        self._data = data

    @property
    def x(self) -> float:
        return self._data.get("$x", 0.0)

    @x.setter
    def x(self, value: float) -> None:
        self._data["$x"] = value

    @property
    def y(self) -> float:
        return self._data.get("$y", 0.0)

    @y.setter
    def y(self, value: float) -> None:
        self._data["$y"] = value

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def attribute(self, column: Column) -> Any:
        return self._data.get(column.id)

    def __repr__(self) -> str:
        return f"Node({self.id!r})"


class VisibleGraph:
    """The part of a graph model that passes the current node filter."""

    def __init__(self, view: nx.Graph, lock: ReadWriteLock):
        self._view = view
        self._lock = lock

    def read_lock(self) -> AbstractContextManager[None]:
        return self._lock.read_lock()

    def nodes(self) -> list[Node]:
        """The visible nodes in insertion order of the underlying graph."""
        return [Node(node, data) for node, data in self._view.nodes(data=True)]

    def node_count(self) -> int:
        return self._view.number_of_nodes()


class GraphModel:
    def __init__(self, graph: nx.Graph, node_filter: NodeFilter | None = None):
        """
        Gives layouts access to a networkx graph.

        All access to the graph from layouts goes through the visible graph and
        is guarded by a read lock shared with anything that changes the model.

        Args:
            graph (nx.Graph): The graph, node data is modified in place.
            node_filter (NodeFilter, optional): Nodes for which the filter returns
                false are hidden from layouts. Defaults to showing every node.
        """
        self._graph = graph
        self._node_filter = node_filter
        self._lock = ReadWriteLock()

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def set_node_filter(self, node_filter: NodeFilter | None) -> None:
        with self._lock.write_lock():
            self._node_filter = node_filter

    def graph_visible(self) -> VisibleGraph:
        if self._node_filter is None:
            view = self._graph
        else:
            view = nx.subgraph_view(self._graph, filter_node=self._node_filter)
        return VisibleGraph(view, self._lock)

    def node_table(self) -> NodeTable:
        with self._lock.read_lock():
            return NodeTable.from_node_data(data for _, data in self._graph.nodes(data=True))
