"""
Data models for the bounds package.

This module contains the value types shared by the hull, concave and
block boundary algorithms.
"""

import dataclasses
from enum import Enum, IntEnum
from typing import NamedTuple


class Point(NamedTuple):
    """A 2D sample location. Two points are the same point if their values are."""

    x: float
    y: float


class Segment(NamedTuple):
    """An ordered pair of points; direction matters for orientation tests."""

    start: Point
    end: Point


@dataclasses.dataclass(frozen=True)
class Region:
    """
    Axis-aligned bounding region.

    A region is only usable when xmin < xmax and ymin < ymax; see
    region.validate_region.
    """

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def area(self) -> float:
        return self.width * self.height

    def __str__(self):
        return f"{self.xmin:f}/{self.xmax:f}/{self.ymin:f}/{self.ymax:f}"


class Orientation(Enum):
    """Turn direction of three ordered points."""

    LEFT = 1  # Counter-clockwise
    RIGHT = -1  # Clockwise
    COLLINEAR = 0


class CellState(IntEnum):
    """State of a single grid cell."""

    EMPTY = 0
    BOUNDARY = 1  # Occupied with at least one open edge
    INTERIOR = 2  # Occupied, no open edges left


class Edge(IntEnum):
    """
    Sides of a grid cell.

    The declaration order is the order open edges are looked for when a new
    ring is started.
    """

    BOTTOM = 0
    LEFT = 1
    TOP = 2
    RIGHT = 3


class BoundaryMethod(Enum):
    """Specifies which boundary to generate."""

    CONVEX = "convex"  # Convex hull
    CONCAVE = "concave"  # Distance-threshold package wrap
    BLOCK = "block"  # Grid rasterized boundary
    BOX = "box"  # Bounding box


class HullAlgorithm(Enum):
    """Specifies which convex hull algorithm to run."""

    MONOTONE_CHAIN = "monotone_chain"
    GIFT_WRAP = "gift_wrap"


class OutputFormat(Enum):
    """Specifies how rings are written."""

    TEXT = "text"
    GMT = "gmt"
    GEOJSON = "geojson"
