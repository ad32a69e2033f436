"""
"Bounding block" boundary.

The points are rasterized into a grid of `increment` sized cells, the sides
of occupied cells that face empty space (or the edge of the grid) are
marked as open edges, and the open edges are then traced into closed
rings. Every open edge ends up in exactly one ring, so disjoint clusters
and holes each produce their own ring.

Open edges are directed so that every cell is wound counter-clockwise:

    bottom: (x0, y0) -> (x1, y0)      right: (x1, y0) -> (x1, y1)
    top:    (x1, y1) -> (x0, y1)      left:  (x0, y1) -> (x0, y0)

Outer rings therefore come out counter-clockwise and hole rings clockwise.
"""

import dataclasses
import logging
import math
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from nsidc.bounds.constants import CORNER_TOLERANCE
from nsidc.bounds.errors import BoundaryCancelled, GridAllocationError, TracingError
from nsidc.bounds.geometry import as_points, points_equal
from nsidc.bounds.models import CellState, Edge, Point, Region
from nsidc.bounds.region import resolve_region

logger = logging.getLogger(__name__)

# (row, col) offsets of the origin and far corner of each directed edge
EDGE_CORNERS = {
    Edge.BOTTOM: ((0, 0), (0, 1)),
    Edge.RIGHT: ((0, 1), (1, 1)),
    Edge.TOP: ((1, 1), (1, 0)),
    Edge.LEFT: ((1, 0), (0, 0)),
}


@dataclasses.dataclass
class Grid:
    """
    Occupancy raster of the points.

    `cells` holds a CellState per [row, col] with row 0 at ymin, and
    `edges` holds one open-edge flag per cell side, indexed by Edge.
    """

    region: Region
    increment: float
    cells: np.ndarray
    edges: np.ndarray

    @classmethod
    def allocate(cls, region: Region, increment: float) -> "Grid":
        """
        Allocate an empty grid covering `region`.

        Raises:
            GridAllocationError: If the arrays cannot be allocated
        """
        rows = max(int(math.floor(abs(region.ymax - region.ymin) / increment)), 1)
        cols = max(int(math.floor(abs(region.xmax - region.xmin) / increment)), 1)

        try:
            cells = np.zeros((rows, cols), dtype=np.int8)
            edges = np.zeros((rows, cols, len(Edge)), dtype=bool)
        except (MemoryError, ValueError) as e:
            raise GridAllocationError(rows, cols, increment) from e

        return cls(region, increment, cells, edges)

    @property
    def rows(self) -> int:
        return self.cells.shape[0]

    @property
    def cols(self) -> int:
        return self.cells.shape[1]

    def open_edge_count(self) -> int:
        return int(self.edges.sum())

    def corner(self, row: int, col: int) -> Point:
        """Lower-left corner of a cell; also valid one past the last row/col."""
        return Point(
            self.region.xmin + col * self.increment,
            self.region.ymin + row * self.increment,
        )

    def edge_corners(self, row: int, col: int, edge: Edge) -> Tuple[Point, Point]:
        """Origin and far corner of a directed cell edge."""
        (r0, c0), (r1, c1) = EDGE_CORNERS[edge]
        return self.corner(row + r0, col + c0), self.corner(row + r1, col + c1)


def rasterize(grid: Grid, points, clamp: bool = False) -> int:
    """
    Mark the cells holding at least one point as occupied.

    Points outside the grid are dropped, unless `clamp` is set, in which
    case they are moved into the nearest row/column. Clamping is meant for
    regions computed from the points themselves, where the only points
    outside are the ones past the last whole cell. The cells they are moved
    into do not contain them, so they can end up outside the traced rings.

    Returns the number of points gridded.
    """
    coords = np.asarray(points, dtype=float)
    if coords.size == 0:
        return 0

    cols = np.floor((coords[:, 0] - grid.region.xmin) / grid.increment)
    rows = np.floor((coords[:, 1] - grid.region.ymin) / grid.increment)

    if clamp:
        cols = np.clip(cols, 0, grid.cols - 1)
        rows = np.clip(rows, 0, grid.rows - 1)
        inside = np.ones(len(coords), dtype=bool)
    else:
        inside = (cols >= 0) & (cols < grid.cols) & (rows >= 0) & (rows < grid.rows)

    grid.cells[rows[inside].astype(np.intp), cols[inside].astype(np.intp)] = CellState.BOUNDARY
    return int(inside.sum())


def classify_edges(grid: Grid) -> int:
    """
    Record the open edges of every occupied cell.

    An edge is open when the neighbor across it is empty or outside the
    grid. Occupied cells without any open edge become INTERIOR and are
    never looked at again.

    Returns the number of open edges.
    """
    occupied = grid.cells != CellState.EMPTY
    padded = np.pad(occupied, 1, mode="constant", constant_values=False)

    grid.edges[..., Edge.BOTTOM] = occupied & ~padded[:-2, 1:-1]
    grid.edges[..., Edge.TOP] = occupied & ~padded[2:, 1:-1]
    grid.edges[..., Edge.LEFT] = occupied & ~padded[1:-1, :-2]
    grid.edges[..., Edge.RIGHT] = occupied & ~padded[1:-1, 2:]

    has_edges = grid.edges.any(axis=2)
    grid.cells[occupied & has_edges] = CellState.BOUNDARY
    grid.cells[occupied & ~has_edges] = CellState.INTERIOR

    return grid.open_edge_count()


def build_grid(points, increment: float, region: Optional[Region] = None) -> Grid:
    """
    Rasterize points and classify the open edges, ready for tracing.

    Raises:
        ValueError: If increment is not a positive number
        InsufficientPointsError: If fewer than 2 distinct points are given
        GridAllocationError: If the grid cannot be allocated
    """
    if not (math.isfinite(increment) and increment > 0):
        raise ValueError(f"Increment must be a positive number, got {increment}")

    pts = as_points(points)
    region, user_supplied = resolve_region(pts, region)
    logger.info(f"Region is {region}")

    grid = Grid.allocate(region, increment)
    logger.info(f"Size of internal grid: {grid.rows}/{grid.cols}")

    gridded = rasterize(grid, pts, clamp=not user_supplied)
    logger.info(f"{gridded} points gridded")

    open_edges = classify_edges(grid)
    logger.debug(f"Recorded {open_edges} open edges")

    return grid


class TracerState(Enum):
    SEARCHING = "searching"
    TRACING = "tracing"
    CLOSED = "closed"
    DONE = "done"


class BoundaryTracer:
    """
    State machine turning a classified grid's open edges into rings.

    SEARCHING scans the grid row by row, resuming at the row of the
    previous find, for the first cell with an open edge (bottom, left, top,
    right). TRACING repeatedly looks around the last cell for the open edge
    starting where the ring currently ends, and appends its far corner.
    When the ring returns to its first point it is CLOSED and handed out,
    and searching resumes. DONE is reached once no open edge is left.

    Each step consumes one open edge, so tracing always terminates. The
    grid is consumed in place.
    """

    def __init__(self, grid: Grid, cancel: Optional[Callable[[], bool]] = None):
        self.grid = grid
        self.cancel = cancel
        self.state = TracerState.SEARCHING
        # Corners sit on multiples of the increment
        self.tolerance = grid.increment * CORNER_TOLERANCE
        self.open_edges = grid.open_edge_count()
        self.scan_row = 0
        self.cell = None
        self.ring = []
        self.ring_count = 0

    def __iter__(self) -> Iterator[List[Point]]:
        while True:
            ring = self.next_ring()
            if ring is None:
                return
            yield ring

    def next_ring(self) -> Optional[List[Point]]:
        """Run the state machine until a ring closes; None once DONE."""
        while self.state is not TracerState.DONE:
            if self.state is TracerState.SEARCHING:
                self._search()
            elif self.state is TracerState.TRACING:
                self._trace()
            elif self.state is TracerState.CLOSED:
                ring, self.ring = self.ring, []
                self.ring_count += 1
                self.state = TracerState.SEARCHING
                return ring
        return None

    def _search(self):
        grid = self.grid
        for row in range(self.scan_row, grid.rows):
            if self.cancel is not None and self.cancel():
                raise BoundaryCancelled(f"Block tracing cancelled at row {row}")

            candidates = (grid.cells[row] == CellState.BOUNDARY) & grid.edges[row].any(axis=1)
            found = np.flatnonzero(candidates)
            if found.size == 0:
                continue

            col = int(found[0])
            edge = next(e for e in Edge if grid.edges[row, col, e])
            origin, end = grid.edge_corners(row, col, edge)
            self._consume(row, col, edge)

            self.ring = [origin, end]
            self.scan_row = row
            self.cell = (row, col)
            self.state = TracerState.TRACING
            return

        self.state = TracerState.DONE

    def _trace(self):
        grid = self.grid
        last = self.ring[-1]

        for row, col in self._neighborhood():
            if grid.cells[row, col] != CellState.BOUNDARY:
                continue
            for edge in Edge:
                if not grid.edges[row, col, edge]:
                    continue
                origin, end = grid.edge_corners(row, col, edge)
                if not points_equal(origin, last, self.tolerance):
                    continue

                self._consume(row, col, edge)
                self.ring.append(end)
                self.cell = (row, col)
                if points_equal(end, self.ring[0], self.tolerance):
                    self.state = TracerState.CLOSED
                return

        raise TracingError(f"No open edge continues ring {self.ring_count} at {last}")

    def _neighborhood(self) -> Iterator[Tuple[int, int]]:
        """
        The current cell, then the rest of its 3x3 neighborhood by row and
        column. Looking at the current cell first keeps a ring on its own
        cell where two occupied cells only touch at a corner.
        """
        row, col = self.cell
        yield row, col
        for r in range(max(row - 1, 0), min(row + 2, self.grid.rows)):
            for c in range(max(col - 1, 0), min(col + 2, self.grid.cols)):
                if (r, c) != (row, col):
                    yield r, c

    def _consume(self, row: int, col: int, edge: Edge):
        self.grid.edges[row, col, edge] = False
        self.open_edges -= 1
        if not self.grid.edges[row, col].any():
            self.grid.cells[row, col] = CellState.INTERIOR


def trace_grid(grid: Grid, cancel: Optional[Callable[[], bool]] = None) -> Iterator[List[Point]]:
    """Lazily yield the rings traced from a classified grid."""
    yield from BoundaryTracer(grid, cancel)


def block_boundary(
    points,
    increment: float,
    region: Optional[Region] = None,
    cancel: Optional[Callable[[], bool]] = None,
) -> List[List[Point]]:
    """
    Block boundary rings of the points at `increment` cell size.

    Args:
        points: Iterable of (x, y) pairs
        increment: Cell size, in the units of the points
        region: Optional region to grid; an invalid region is replaced by
            the region of the points
        cancel: Optional callable checked once per grid row scanned

    Returns:
        List of closed rings; empty if no cell is occupied
    """
    grid = build_grid(points, increment, region)
    rings = list(trace_grid(grid, cancel))
    logger.info(f"Found {sum(len(r) - 1 for r in rings)} total boundary points in {len(rings)} rings")
    return rings
