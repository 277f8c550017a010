from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Integral, Real
from typing import Any

from cartesian_import.attributes import Numeric, classify
from cartesian_import.errors import UnknownColumnError

RESERVED_PREFIX = "$"
"""Node data keys starting with this prefix hold layout data, not attributes."""


@dataclass(frozen=True)
class Column:
    """Handle naming one attribute slot shared by all nodes."""

    id: Hashable
    title: str = ""
    value_type: type = field(default=object, compare=False)

    def __post_init__(self):
        if not self.title:
            object.__setattr__(self, "title", str(self.id))

    @property
    def is_number(self) -> bool:
        return issubclass(self.value_type, (Real, Decimal)) and not issubclass(self.value_type, bool)


def _infer_type(values: list[Any]) -> type:
    if values and all(isinstance(classify(value), Numeric) for value in values):
        if all(isinstance(value, Integral) for value in values):
            return int
        return float
    if values and all(isinstance(value, str) for value in values):
        return str
    return object


class NodeTable:
    """The attribute columns of a node set.

    Networkx does not type node attributes, so the type of a column is
    inferred from the values present. A column is numeric when all of its
    present values are numbers, nodes lacking the attribute do not count.
    """

    def __init__(self, columns: Iterable[Column]):
        self._columns: dict[Hashable, Column] = {column.id: column for column in columns}

    @classmethod
    def from_node_data(cls, node_data: Iterable[dict[Hashable, Any]]) -> "NodeTable":
        values: dict[Hashable, list[Any]] = dict()
        for data in node_data:
            for key, value in data.items():
                if isinstance(key, str) and key.startswith(RESERVED_PREFIX):
                    continue
                present = values.setdefault(key, [])
                if value is not None:
                    present.append(value)
        return cls(Column(id=key, value_type=_infer_type(present)) for key, present in values.items())

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, column_id: Hashable) -> bool:
        return self.has_column(column_id)

    def numeric_columns(self) -> list[Column]:
        return [column for column in self._columns.values() if column.is_number]

    def has_column(self, column_id: Hashable) -> bool:
        return column_id in self._columns

    def column(self, column_id: Hashable) -> Column:
        try:
            return self._columns[column_id]
        except KeyError:
            raise UnknownColumnError(f"Unknown node column: {column_id}") from None
