import json
import logging
import math
from importlib.util import find_spec
from pathlib import Path

import networkx as nx  # type: ignore
import rich_click as click
from rich import print, print_json
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from cartesian_import.errors import CartesianImportError
from cartesian_import.geometry.point import FloatPoint
from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi.controller import LayoutController
from cartesian_import.layout_spi.registry import default_registry
from cartesian_import.layouts.cartesian import DEFAULT_SCALE, LAYOUT_NAME

HAS_DOT = find_spec("pydot") is not None

FORMATS = ["auto", "json", "graphml", "gexf", "gml", "dot"]

_SUFFIXES = {
    ".json": "json",
    ".graphml": "graphml",
    ".xml": "graphml",
    ".gexf": "gexf",
    ".gml": "gml",
    ".dot": "dot",
    ".gv": "dot",
}

logger = logging.getLogger(__name__)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(FORMATS),
    default="auto",
    show_default=True,
    help="Graph file format, guessed from the file suffix by default.",
)
@click.option("--x-column", "-x", envvar="CARTESIAN_IMPORT_X_COLUMN", help="Numeric node column holding x-coordinates.")
@click.option("--y-column", "-y", envvar="CARTESIAN_IMPORT_Y_COLUMN", help="Numeric node column holding y-coordinates.")
@click.option(
    "--scale",
    type=float,
    default=DEFAULT_SCALE,
    show_default=True,
    envvar="CARTESIAN_IMPORT_SCALE",
    help="Points are re-scaled to fit within a bounding region of this size.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the node positions as JSON.")
@click.option("--list-columns", is_flag=True, help="List the numeric node columns and exit.")
@click.option("--describe", is_flag=True, help="Show the layout properties and exit.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log messages of this level and above to stderr.",
)
def run(file, file_format, x_column, y_column, scale, as_json, list_columns, describe, log_level):
    """Position the nodes of a graph file at the coordinates stored in two node columns."""
    _configure_logging(log_level)

    graph = read_graph(file, file_format)
    graph_model = GraphModel(graph)

    if list_columns:
        print(_columns_table(graph_model))
        return

    default_registry.load_entry_points()
    layout = default_registry.builder(LAYOUT_NAME).build_layout()
    properties = {layout_property.name: layout_property for layout_property in layout.properties()}

    try:
        properties["scale"].set_value(scale)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--scale") from e
    for name, text, hint in (("xColumn", x_column, "--x-column"), ("yColumn", y_column, "--y-column")):
        if text is None:
            continue
        try:
            properties[name].set_as_text(text, graph_model)
        except CartesianImportError as e:
            raise click.BadParameter(str(e.args[0]), param_hint=hint) from e

    if describe:
        print(layout.builder.ui.simple_panel(layout))
        return

    if not layout.ready():
        raise click.UsageError("Both --x-column and --y-column are required.")

    LayoutController().execute(layout, graph_model)
    positions = {node.id: FloatPoint(x=node.x, y=node.y) for node in graph_model.graph_visible().nodes()}

    if as_json:
        print_json(data={str(node): _json_coordinates(point) for node, point in positions.items()})
    else:
        print(_positions_table(positions))


def read_graph(path: Path, file_format: str = "auto") -> nx.Graph:
    if file_format == "auto":
        try:
            file_format = _SUFFIXES[path.suffix.lower()]
        except KeyError:
            raise click.BadParameter(
                f"Cannot guess the format of {path.name}, use --format.", param_hint="FILE"
            ) from None

    match file_format:
        case "json":
            return _graph_from_json(json.loads(path.read_text()))
        case "graphml":
            return nx.read_graphml(path)
        case "gexf":
            return nx.read_gexf(path)
        case "gml":
            return nx.read_gml(path)
        case "dot":
            if not HAS_DOT:
                raise click.ClickException("Reading DOT files requires pydot to be installed.")
            from pydot import graph_from_dot_data

            dots = graph_from_dot_data(path.read_text())
            if not dots:
                raise click.ClickException(f"No graph found in {path.name}.")
            graph = nx.Graph(nx.nx_pydot.from_pydot(dots[0]))
            convert_dot_attributes(graph)
            return graph
        case _:
            raise click.BadParameter(f"Unknown format: {file_format}", param_hint="--format")


def _graph_from_json(data) -> nx.Graph:
    if isinstance(data, dict) and "nodes" in data:
        edges = "links" if "links" in data else "edges"
        return nx.node_link_graph(data, edges=edges)
    # Otherwise assume a very simple JSON format mapping node names to lists of
    # neighbors.
    graph = nx.Graph()
    for node, neighbors in data.items():
        graph.add_node(node)
        for neighbor in neighbors:
            graph.add_edge(node, neighbor)
    return graph


def convert_dot_attributes(graph: nx.Graph) -> None:
    """DOT attributes are all strings, turn the ones holding numbers into floats."""
    for _, data in graph.nodes(data=True):
        for key, value in data.items():
            if not isinstance(value, str):
                continue
            try:
                data[key] = float(value.strip('"'))
            except ValueError:
                continue


def _json_coordinates(point: FloatPoint) -> list[float | None]:
    """Coordinates for JSON output, non-finite values become ``null``."""
    return [value if math.isfinite(value) else None for value in point.as_tuple()]


def _configure_logging(level: str) -> None:
    install(show_locals=False)
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _columns_table(graph_model: GraphModel) -> Table:
    table = Table(title="Numeric node columns")
    table.add_column("Column")
    table.add_column("Type")
    for column in graph_model.node_table().numeric_columns():
        table.add_row(column.title, column.value_type.__name__)
    return table


def _positions_table(positions: dict) -> Table:
    table = Table(title=LAYOUT_NAME)
    table.add_column("Node")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for node, point in positions.items():
        table.add_row(str(node), f"{point.x:.2f}", f"{point.y:.2f}")

    finite = [point for point in positions.values() if point.is_finite()]
    if finite:
        low, high = FloatPoint.min_point(finite), FloatPoint.max_point(finite)
        table.caption = f"Bounding box ({low.x:.2f}, {low.y:.2f}) to ({high.x:.2f}, {high.y:.2f})"
    if len(finite) < len(positions):
        logger.warning("%d node(s) ended up with non-finite coordinates", len(positions) - len(finite))
    return table
