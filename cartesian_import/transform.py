"""
Imports node coordinates from two numeric attributes.

Each axis is read independently, mapped to 32-bit floats and then shifted
and scaled so that the midpoint of its range lies on the origin and the
range spans exactly ``scale``. Nothing about the graph topology is used.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import numpy as np
import numpy.typing as npt

from cartesian_import.attributes import as_float32

logger = logging.getLogger(__name__)

N = TypeVar("N")

Coords = npt.NDArray[np.float32]


@dataclass(frozen=True, slots=True)
class AxisSpan:
    min: np.float32
    max: np.float32

    @property
    def span(self) -> np.float32:
        return self.max - self.min

    @property
    def midpoint(self) -> np.float32:
        return self.min + self.span / np.float32(2)

    @property
    def is_degenerate(self) -> bool:
        return not self.span > 0


def axis_bounds(coords: Coords) -> AxisSpan:
    """Bounds of one axis, the coordinates must not be empty."""
    return AxisSpan(min=coords.min(), max=coords.max())


def read_coords(nodes: Iterable[N], get_value: Callable[[N], Any]) -> Coords:
    return np.fromiter((as_float32(get_value(node)) for node in nodes), dtype=np.float32)


def rescale_coords(coords: Coords, scale: float) -> Coords:
    """Center the coordinates on the origin and stretch them to span ``scale``.

    A zero span is divided through as is, so the axis ends up with
    non-finite values (``nan`` where the offset is zero, ``inf`` otherwise).
    """
    bounds = axis_bounds(coords)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        # Division happens in double precision and is narrowed afterwards.
        factor = np.float32(np.float64(scale) / np.float64(bounds.span))
        return factor * (coords - bounds.midpoint)


def import_coordinates(
    scale: float,
    nodes: Iterable[N],
    get_x: Callable[[N], Any],
    get_y: Callable[[N], Any],
    set_xy: Callable[[N, float, float], None],
) -> None:
    """Set the position of every node from its x and y attribute values.

    Args:
        scale (float): Side length of the square the points are fitted in.
        nodes (Iterable[N]): The nodes, iterated in a stable order.
        get_x (Callable[[N], Any]): Raw x attribute of a node, non-numeric values count as 0.
        get_y (Callable[[N], Any]): Raw y attribute of a node, non-numeric values count as 0.
        set_xy (Callable[[N, float, float], None]): Receives each node with its new coordinates.
    """
    node_list: Sequence[N] = list(nodes)
    if not node_list:
        logger.debug("No nodes to import coordinates for")
        return

    xs = read_coords(node_list, get_x)
    ys = read_coords(node_list, get_y)

    for axis, coords in (("x", xs), ("y", ys)):
        if axis_bounds(coords).is_degenerate:
            logger.warning("All %s values are equal, %s coordinates will not be finite", axis, axis)

    scaled_xs = rescale_coords(xs, scale)
    scaled_ys = rescale_coords(ys, scale)

    for node, x, y in zip(node_list, scaled_xs, scaled_ys):
        set_xy(node, float(x), float(y))
