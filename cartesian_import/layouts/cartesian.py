import logging
import math
from numbers import Real

import numpy as np

from cartesian_import.errors import PropertyDescriptorError
from cartesian_import.graph.columns import Column
from cartesian_import.graph.model import GraphModel, Node, VisibleGraph
from cartesian_import.layout_spi.editors import NodeColumnNumbersEditor, NumberEditor, PropertyEditor
from cartesian_import.layout_spi.layout import Layout, LayoutBuilder, LayoutUI
from cartesian_import.layout_spi.property import LayoutProperty
from cartesian_import.layout_spi.registry import service_provider
from cartesian_import.transform import import_coordinates

logger = logging.getLogger(__name__)

LAYOUT_NAME = "Cartesian Layout Import"

DEFAULT_SCALE = 1000.0

_FLOAT32_MAX = float(np.finfo(np.float32).max)

# (name, attribute, value type, description, editor)
_PROPERTIES: tuple[tuple[str, str, type, str, type[PropertyEditor]], ...] = (
    (
        "scale",
        "scale",
        float,
        "points will be re-scaled to fit within a bounding region of this size",
        NumberEditor,
    ),
    ("xColumn", "x_column", Column, "column containing x-coordinates", NodeColumnNumbersEditor),
    ("yColumn", "y_column", Column, "column containing y-coordinates", NodeColumnNumbersEditor),
)


class ImportCartesianLayout(Layout):
    """Places nodes at the coordinates stored in two of their numeric attributes.

    Both axes are fitted independently into a square of side ``scale``
    centered on the origin, so the aspect ratio of the input is not kept.
    The layout runs in a single step and is finished afterwards, until it
    is initialized or reset again.
    """

    def __init__(self, builder: "ImportCartesianLayoutBuilder"):
        self._builder = builder
        self._graph_model: GraphModel | None = None
        self._finished = False

        self._scale = DEFAULT_SCALE
        self._x_column: Column | None = None
        self._y_column: Column | None = None

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError(f"Scale must be a real number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"Scale must be positive and finite, got {value!r}")
        if value > _FLOAT32_MAX:
            raise ValueError(f"Scale {value!r} does not fit into a 32-bit float")
        self._scale = float(value)

    @property
    def x_column(self) -> Column | None:
        return self._x_column

    @x_column.setter
    def x_column(self, column: Column | None) -> None:
        self._x_column = _check_column(column)

    @property
    def y_column(self) -> Column | None:
        return self._y_column

    @y_column.setter
    def y_column(self, column: Column | None) -> None:
        self._y_column = _check_column(column)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def builder(self) -> "ImportCartesianLayoutBuilder":
        return self._builder

    def init_algo(self) -> None:
        self._finished = False

    def set_graph_model(self, graph_model: GraphModel) -> None:
        self._graph_model = graph_model

    def can_algo(self) -> bool:
        return not self._finished and self._x_column is not None and self._y_column is not None

    def go_algo(self) -> None:
        x_column, y_column = self._x_column, self._y_column
        if x_column is None or y_column is None:
            raise RuntimeError("Both the x and the y column have to be set before running the layout")
        graph = self._graph()

        with graph.read_lock():
            nodes = graph.nodes()
            logger.debug("Importing coordinates from %r and %r for %d node(s)", x_column.id, y_column.id, len(nodes))
            import_coordinates(
                self._scale,
                nodes,
                get_x=lambda node: node.attribute(x_column),
                get_y=lambda node: node.attribute(y_column),
                set_xy=Node.set_position,
            )

        self._finished = True

    def end_algo(self) -> None:
        pass

    def properties(self) -> list[LayoutProperty]:
        properties = []
        for name, attribute, value_type, description, editor in _PROPERTIES:
            try:
                properties.append(
                    LayoutProperty.create(
                        self,
                        value_type,
                        name,
                        self._builder.name,
                        description,
                        attribute=attribute,
                        editor=editor(),
                    )
                )
            except PropertyDescriptorError:
                logger.exception("Could not describe layout property %r", name)
        return properties

    def reset_properties_values(self) -> None:
        self._scale = DEFAULT_SCALE
        self._x_column = None
        self._y_column = None
        self._finished = False

    def configure(self, scale: float, x_column: Column | None, y_column: Column | None) -> None:
        self.scale = scale
        self.x_column = x_column
        self.y_column = y_column

    def ready(self) -> bool:
        return self.can_algo()

    def run(self, graph_model: GraphModel) -> None:
        """Bind a graph model and import the coordinates in one pass."""
        self.set_graph_model(graph_model)
        self.go_algo()

    def reset(self) -> None:
        self.reset_properties_values()

    def _graph(self) -> VisibleGraph:
        if self._graph_model is None:
            raise RuntimeError("No graph model set")
        return self._graph_model.graph_visible()


def _check_column(column: Column | None) -> Column | None:
    if column is not None and not isinstance(column, Column):
        raise TypeError(f"Expected a node column, got {column!r}")
    return column


class ImportCartesianLayoutUI(LayoutUI):
    @property
    def description(self) -> str:
        return (
            "Uses two numeric node columns as x and y coordinates, re-scaled to fit within a square bounding region."
        )


@service_provider
class ImportCartesianLayoutBuilder(LayoutBuilder):
    def __init__(self) -> None:
        self._ui = ImportCartesianLayoutUI()

    @property
    def name(self) -> str:
        return LAYOUT_NAME

    @property
    def ui(self) -> ImportCartesianLayoutUI:
        return self._ui

    def build_layout(self) -> ImportCartesianLayout:
        return ImportCartesianLayout(self)
