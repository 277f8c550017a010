from collections.abc import Hashable

from cartesian_import.geometry.point import FloatPoint
from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi.controller import LayoutController
from cartesian_import.layouts.cartesian import DEFAULT_SCALE, ImportCartesianLayoutBuilder

from .engine import G, LayoutEngine


class CartesianImportLayout(LayoutEngine[G]):
    """Layout engine that uses two numeric node attributes as coordinates.

    The attribute values are re-scaled so that every axis spans ``scale`` and
    is centered on the origin. The resulting positions are also written to the
    `$x` and `$y` attributes of the nodes.
    """

    def __init__(self, x_column: Hashable, y_column: Hashable, scale: float = DEFAULT_SCALE):
        self.x_column = x_column
        self.y_column = y_column
        self.scale = scale

    def __call__(self, graph: G) -> dict[Hashable, FloatPoint]:
        if graph.number_of_nodes() == 0:
            return dict()

        graph_model = GraphModel(graph)
        node_table = graph_model.node_table()

        layout = ImportCartesianLayoutBuilder().build_layout()
        layout.configure(
            self.scale,
            node_table.column(self.x_column),
            node_table.column(self.y_column),
        )
        LayoutController().execute(layout, graph_model)

        return {node.id: FloatPoint(x=node.x, y=node.y) for node in graph_model.graph_visible().nodes()}
