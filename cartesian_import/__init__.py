"""
Lays out graphs at coordinates imported from two numeric node attributes.
"""

from cartesian_import.graph.columns import Column, NodeTable
from cartesian_import.graph.model import GraphModel, Node
from cartesian_import.layouts.cartesian import (
    ImportCartesianLayout,
    ImportCartesianLayoutBuilder,
    ImportCartesianLayoutUI,
)
from cartesian_import.layout_engines.cartesian import CartesianImportLayout
from cartesian_import.layout_spi.controller import LayoutController
from cartesian_import.layout_spi.property import LayoutProperty
from cartesian_import.layout_spi.registry import default_registry
from cartesian_import.transform import import_coordinates
from cartesian_import.geometry.point import FloatPoint

__all__ = [
    "Column",
    "NodeTable",
    "GraphModel",
    "Node",
    "ImportCartesianLayout",
    "ImportCartesianLayoutBuilder",
    "ImportCartesianLayoutUI",
    "CartesianImportLayout",
    "LayoutController",
    "LayoutProperty",
    "default_registry",
    "import_coordinates",
    "FloatPoint",
]
