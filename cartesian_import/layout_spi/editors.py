import math
from typing import Any

from cartesian_import.errors import UnknownColumnError
from cartesian_import.graph.columns import Column
from cartesian_import.graph.model import GraphModel


class PropertyEditor:
    """Converts property values from and to text, as typed into a host UI."""

    def parse(self, text: str, graph_model: GraphModel | None = None) -> Any:
        return text

    def format(self, value: Any) -> str:
        return "" if value is None else str(value)

    def choices(self, graph_model: GraphModel) -> list[Any] | None:
        """The values that may be chosen, ``None`` for free input."""
        return None


class NumberEditor(PropertyEditor):
    def parse(self, text: str, graph_model: GraphModel | None = None) -> float:
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"Not a number: {text!r}") from None

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        if math.isfinite(value) and float(value).is_integer():
            return str(int(value))
        return str(value)


class NodeColumnNumbersEditor(PropertyEditor):
    """Chooses one of the numeric columns of the node table."""

    def choices(self, graph_model: GraphModel) -> list[Column]:
        return graph_model.node_table().numeric_columns()

    def parse(self, text: str, graph_model: GraphModel | None = None) -> Column:
        if graph_model is None:
            raise ValueError("A graph model is needed to look up node columns")
        columns = self.choices(graph_model)
        for column in columns:
            if str(column.id) == text:
                return column
        for column in columns:
            if column.title == text:
                return column
        if graph_model.node_table().has_column(text):
            raise UnknownColumnError(f"Node column {text!r} is not numeric")
        raise UnknownColumnError(f"Unknown node column: {text!r}")

    def format(self, value: Any) -> str:
        if isinstance(value, Column):
            return value.title
        return super().format(value)


def editor_for(value_type: type) -> PropertyEditor:
    if issubclass(value_type, (int, float)) and not issubclass(value_type, bool):
        return NumberEditor()
    return PropertyEditor()
