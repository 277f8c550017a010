from abc import ABC, abstractmethod

from rich import box
from rich.console import RenderableType
from rich.table import Table

from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi.property import LayoutProperty


class Layout(ABC):
    """A layout algorithm as driven by the host.

    The host binds a graph model, calls `init_algo` once, then `go_algo` for
    as long as `can_algo` is true and finally `end_algo`.
    """

    @abstractmethod
    def init_algo(self) -> None: ...

    @abstractmethod
    def set_graph_model(self, graph_model: GraphModel) -> None: ...

    @abstractmethod
    def go_algo(self) -> None:
        """Run one step of the algorithm."""

    @abstractmethod
    def can_algo(self) -> bool:
        """Whether the host may call `go_algo` (again)."""

    @abstractmethod
    def end_algo(self) -> None: ...

    @abstractmethod
    def properties(self) -> list[LayoutProperty]: ...

    @abstractmethod
    def reset_properties_values(self) -> None: ...

    @property
    @abstractmethod
    def builder(self) -> "LayoutBuilder": ...


class LayoutUI(ABC):
    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    def quality_rank(self) -> int:
        """Quality from 1 to 5, -1 when not ranked."""
        return -1

    @property
    def speed_rank(self) -> int:
        """Speed from 1 to 5, -1 when not ranked."""
        return -1

    def simple_panel(self, layout: Layout) -> RenderableType:
        """A table of the layout's properties with their current values."""
        table = Table(title=layout.builder.name, caption=self.description, box=box.ROUNDED)
        table.add_column("Property", style="bold")
        table.add_column("Value")
        table.add_column("Description", style="dim")
        for layout_property in layout.properties():
            table.add_row(layout_property.name, layout_property.as_text(), layout_property.description)
        return table


class LayoutBuilder(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def ui(self) -> LayoutUI: ...

    @abstractmethod
    def build_layout(self) -> Layout: ...
