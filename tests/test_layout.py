from types import SimpleNamespace

import networkx as nx
import pytest
from rich.console import Console
from rich.table import Table

from cartesian_import.errors import UnknownColumnError, UnknownLayoutError
from cartesian_import.graph.columns import Column
from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi import registry as registry_module
from cartesian_import.layout_spi.controller import LayoutController
from cartesian_import.layout_spi.editors import NodeColumnNumbersEditor, NumberEditor
from cartesian_import.layout_spi.registry import LayoutRegistry, default_registry
from cartesian_import.layouts import cartesian
from cartesian_import.layouts.cartesian import (
    DEFAULT_SCALE,
    LAYOUT_NAME,
    ImportCartesianLayout,
    ImportCartesianLayoutBuilder,
)


@pytest.fixture
def graph_model() -> GraphModel:
    graph = nx.Graph()
    graph.add_node("a", lon=-1, lat=0, name="Alpha")
    graph.add_node("b", lon=0, lat=1, name="Beta")
    graph.add_node("c", lon=1, lat=2, name="Gamma")
    graph.add_edge("a", "c")
    return GraphModel(graph)


@pytest.fixture
def layout() -> ImportCartesianLayout:
    return ImportCartesianLayoutBuilder().build_layout()


def configured(layout: ImportCartesianLayout, graph_model: GraphModel) -> ImportCartesianLayout:
    table = graph_model.node_table()
    layout.configure(DEFAULT_SCALE, table.column("lon"), table.column("lat"))
    return layout


def positions(graph_model: GraphModel) -> dict:
    return {node: (data["$x"], data["$y"]) for node, data in graph_model.graph.nodes(data=True)}


def test_builder():
    builder = ImportCartesianLayoutBuilder()
    layout = builder.build_layout()

    assert builder.name == "Cartesian Layout Import"
    assert isinstance(layout, ImportCartesianLayout)
    assert layout.builder is builder
    assert builder.ui.quality_rank == -1
    assert builder.ui.speed_rank == -1


def test_builder_is_registered():
    assert LAYOUT_NAME in default_registry
    assert isinstance(default_registry.builder(LAYOUT_NAME), ImportCartesianLayoutBuilder)


def test_readiness_needs_both_columns(layout: ImportCartesianLayout):
    layout.reset()
    assert not layout.ready()

    layout.x_column = Column("lon")
    assert not layout.ready()

    layout.y_column = Column("lat")
    assert layout.ready()


def test_run_imports_coordinates(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model).run(graph_model)

    assert positions(graph_model) == {
        "a": (-500.0, -500.0),
        "b": (0.0, 0.0),
        "c": (500.0, 500.0),
    }


def test_layout_is_finished_after_one_run(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model).run(graph_model)

    assert layout.finished
    assert not layout.ready()

    layout.init_algo()
    assert layout.ready()


def test_reset_restores_defaults(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model).run(graph_model)
    layout.scale = 10

    layout.reset()

    assert layout.scale == DEFAULT_SCALE
    assert layout.x_column is None
    assert layout.y_column is None
    assert not layout.finished


def test_lock_is_held_during_the_pass(layout, graph_model, monkeypatch):
    readers = []
    monkeypatch.setattr(cartesian, "import_coordinates", lambda *args, **kwargs: readers.append(graph_model.lock.readers))

    configured(layout, graph_model).run(graph_model)

    assert readers == [1]
    assert graph_model.lock.readers == 0


def test_lock_is_released_when_the_pass_fails(layout, graph_model, monkeypatch):
    def _fail(*args, **kwargs):
        raise FloatingPointError("boom")

    monkeypatch.setattr(cartesian, "import_coordinates", _fail)

    with pytest.raises(FloatingPointError):
        configured(layout, graph_model).run(graph_model)

    assert graph_model.lock.readers == 0
    assert layout.ready()


def test_empty_graph_is_a_no_op(layout: ImportCartesianLayout):
    graph_model = GraphModel(nx.Graph())
    layout.configure(DEFAULT_SCALE, Column("lon"), Column("lat"))

    layout.run(graph_model)

    assert layout.finished
    assert graph_model.lock.readers == 0


def test_only_visible_nodes_are_laid_out(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model)
    graph_model.set_node_filter(lambda node: node != "c")

    layout.run(graph_model)

    data = graph_model.graph.nodes
    assert (data["a"]["$x"], data["b"]["$x"]) == (-500.0, 500.0)
    assert "$x" not in data["c"]


def test_run_without_graph_model(layout: ImportCartesianLayout):
    layout.configure(DEFAULT_SCALE, Column("lon"), Column("lat"))

    with pytest.raises(RuntimeError):
        layout.go_algo()


def test_run_without_columns(layout: ImportCartesianLayout, graph_model: GraphModel):
    with pytest.raises(RuntimeError):
        layout.run(graph_model)


@pytest.mark.parametrize("scale", [0, -1, float("nan"), float("inf"), True, "10", 1e39])
def test_invalid_scale(layout: ImportCartesianLayout, scale):
    with pytest.raises(ValueError):
        layout.scale = scale

    assert layout.scale == DEFAULT_SCALE


def test_columns_must_be_columns(layout: ImportCartesianLayout):
    with pytest.raises(TypeError):
        layout.x_column = "lon"


def test_properties(layout: ImportCartesianLayout):
    properties = layout.properties()

    assert [p.name for p in properties] == ["scale", "xColumn", "yColumn"]
    assert [p.description for p in properties] == [
        "points will be re-scaled to fit within a bounding region of this size",
        "column containing x-coordinates",
        "column containing y-coordinates",
    ]
    assert {p.category for p in properties} == {LAYOUT_NAME}
    assert isinstance(properties[0].editor, NumberEditor)
    assert isinstance(properties[1].editor, NodeColumnNumbersEditor)
    assert isinstance(properties[2].editor, NodeColumnNumbersEditor)


def test_properties_read_and_write_the_layout(layout: ImportCartesianLayout, graph_model: GraphModel):
    scale, x_column, y_column = layout.properties()

    scale.set_as_text("250")
    x_column.set_as_text("lon", graph_model)
    y_column.set_value(Column("lat"))

    assert layout.scale == 250.0
    assert scale.as_text() == "250"
    assert layout.x_column == Column("lon")
    assert x_column.value == Column("lon")
    assert y_column.as_text() == "lat"
    assert layout.ready()


def test_column_property_only_accepts_numeric_columns(layout: ImportCartesianLayout, graph_model: GraphModel):
    x_column = layout.properties()[1]

    assert [column.id for column in x_column.editor.choices(graph_model)] == ["lon", "lat"]
    with pytest.raises(UnknownColumnError, match="not numeric"):
        x_column.set_as_text("name", graph_model)
    with pytest.raises(UnknownColumnError, match="Unknown"):
        x_column.set_as_text("height", graph_model)
    with pytest.raises(ValueError):
        x_column.set_as_text("lon")


def test_broken_property_descriptor_is_skipped(layout, monkeypatch, caplog):
    broken = ("bogus", "no_such_attribute", float, "does not exist", NumberEditor)
    monkeypatch.setattr(cartesian, "_PROPERTIES", cartesian._PROPERTIES + (broken,))

    with caplog.at_level("ERROR", logger="cartesian_import.layouts.cartesian"):
        properties = layout.properties()

    assert [p.name for p in properties] == ["scale", "xColumn", "yColumn"]
    assert "bogus" in caplog.text


def test_ui_panel_lists_properties(layout: ImportCartesianLayout):
    panel = layout.builder.ui.simple_panel(layout)
    console = Console(width=200)

    with console.capture() as capture:
        console.print(panel)

    assert isinstance(panel, Table)
    assert LAYOUT_NAME in capture.get()
    assert "xColumn" in capture.get()
    assert "1000" in capture.get()


def test_controller_runs_a_single_step(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model)

    assert LayoutController().execute(layout, graph_model) == 1
    assert positions(graph_model)["c"] == (500.0, 500.0)
    # Executing again re-initializes the layout.
    assert LayoutController().execute(layout, graph_model) == 1


def test_controller_respects_max_iterations(layout: ImportCartesianLayout, graph_model: GraphModel):
    configured(layout, graph_model)

    assert LayoutController(max_iterations=0).execute(layout, graph_model) == 0
    assert layout.ready()


def test_controller_ends_the_layout_on_failure(graph_model: GraphModel):
    ended = []

    class FailingLayout(ImportCartesianLayout):
        def go_algo(self):
            raise RuntimeError("boom")

        def end_algo(self):
            ended.append(True)

    layout = FailingLayout(ImportCartesianLayoutBuilder())
    configured(layout, graph_model)

    with pytest.raises(RuntimeError):
        LayoutController().execute(layout, graph_model)

    assert ended == [True]


def test_registry():
    registry = LayoutRegistry()
    builder = ImportCartesianLayoutBuilder()

    assert registry.register(builder) is builder
    assert registry.register(ImportCartesianLayoutBuilder()) is builder
    assert registry.builders() == [builder]
    assert registry.builder(LAYOUT_NAME) is builder
    with pytest.raises(UnknownLayoutError):
        registry.builder("Force Atlas")


def test_registry_loads_entry_points(monkeypatch, caplog):
    def _broken():
        raise ImportError("boom")

    entries = [
        SimpleNamespace(value="cartesian_import.layouts.cartesian:ImportCartesianLayoutBuilder", load=lambda: ImportCartesianLayoutBuilder),
        SimpleNamespace(value="missing.module:Builder", load=_broken),
    ]
    monkeypatch.setattr(registry_module, "entry_points", lambda group: entries)
    registry = LayoutRegistry()

    with caplog.at_level("WARNING", logger="cartesian_import.layout_spi.registry"):
        assert registry.load_entry_points() == 1

    assert LAYOUT_NAME in registry
    assert "missing.module:Builder" in caplog.text
    assert registry.load_entry_points() == 0
