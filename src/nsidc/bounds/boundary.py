"""
Boundary generation entry point.

This module routes a point set to one of the boundary methods:

1. **convex**: convex hull (monotone chain or package wrap)
2. **concave**: distance-threshold package wrap, retried with a growing
   distance and falling back to the convex hull
3. **block**: grid rasterized boundary, possibly several rings
4. **box**: bounding box

and returns the rings along with metadata about how they were produced,
including how much of the data the rings cover.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import shapely
from shapely.geometry import LinearRing, MultiPolygon, Polygon

from nsidc.bounds.block import build_grid, trace_grid
from nsidc.bounds.concave import adaptive_concave_hull
from nsidc.bounds.constants import DEFAULT_GROWTH_FACTOR, EPSILON
from nsidc.bounds.geometry import as_points
from nsidc.bounds.hull import convex_hull
from nsidc.bounds.models import BoundaryMethod, HullAlgorithm, Point, Region
from nsidc.bounds.region import bounding_box

logger = logging.getLogger(__name__)


def deadline(seconds: float) -> Callable[[], bool]:
    """Cancellation check that turns True once `seconds` have elapsed."""
    expires = time.monotonic() + seconds
    return lambda: time.monotonic() >= expires


def generate_boundary(
    points,
    method: Union[BoundaryMethod, str] = BoundaryMethod.CONVEX,
    distance: Optional[float] = None,
    increment: Optional[float] = None,
    region: Optional[Region] = None,
    algorithm: Union[HullAlgorithm, str] = HullAlgorithm.MONOTONE_CHAIN,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
    cancel: Optional[Callable[[], bool]] = None,
) -> Tuple[List[List[Point]], Dict]:
    """
    Generate the boundary ring(s) of a point set.

    Parameters:
    -----------
    points : array-like
        Iterable of (x, y) pairs or an (n, 2) array
    method : BoundaryMethod or str
        Which boundary to generate
    distance : float, optional
        Concave hull distance threshold; None or 0 to estimate it
    increment : float, optional
        Block cell size, required for the block method
    region : Region, optional
        Region for the block grid, concave density estimate or box
    algorithm : HullAlgorithm or str
        Convex hull algorithm
    growth_factor : float
        Concave hull distance multiplier between attempts
    cancel : callable, optional
        Returns True to stop a long running concave or block boundary

    Returns:
    --------
    rings : list of list of Point
        Closed rings, first point repeated as last
    metadata : dict
        Metadata about the generation process including:
        - method: Boundary method used
        - points: Number of distinct input points
        - rings: Number of rings
        - vertices: Total ring vertices, excluding closing points
        - data_coverage: Fraction of input points covered by the rings
        - generation_time_seconds: Total processing time
    """
    start_time = time.time()
    method = BoundaryMethod(method)
    pts = as_points(points)

    metadata = {
        "method": method.value,
        "points": len(pts),
    }

    if method is BoundaryMethod.CONVEX:
        algorithm = HullAlgorithm(algorithm)
        rings = [convex_hull(pts, algorithm)]
        metadata["algorithm"] = algorithm.value

    elif method is BoundaryMethod.CONCAVE:
        result = adaptive_concave_hull(pts, distance, region, growth_factor, cancel)
        rings = [result.ring]
        metadata["distance"] = result.distance
        metadata["attempts"] = result.attempts
        metadata["fallback"] = result.fallback

    elif method is BoundaryMethod.BLOCK:
        if increment is None:
            raise ValueError("The block boundary requires an increment")
        grid = build_grid(pts, increment, region)
        metadata["grid_rows"] = grid.rows
        metadata["grid_cols"] = grid.cols
        metadata["open_edges"] = grid.open_edge_count()
        rings = list(trace_grid(grid, cancel))

    else:
        rings = [bounding_box(pts, region)]

    metadata["rings"] = len(rings)
    metadata["vertices"] = sum(len(ring) - 1 for ring in rings)
    metadata["data_coverage"] = data_coverage(rings, pts)
    metadata["generation_time_seconds"] = time.time() - start_time

    logger.info(
        f"Found {metadata['vertices']} {method.value} boundary points "
        f"in {metadata['rings']} rings"
    )
    return rings, metadata


def rings_to_geometry(rings: List[List[Point]]) -> MultiPolygon:
    """
    Convert rings to a shapely MultiPolygon.

    Counter-clockwise rings are polygon shells. Clockwise rings (the holes
    traced by the block boundary) become interiors of the smallest shell
    holding them, or shells of their own if no shell does. Degenerate rings
    (fewer than 3 distinct vertices, or no area) are skipped, since they
    cannot form a valid polygon.
    """
    shells = []
    holes = []
    for ring in rings:
        if len(set(ring)) < 3:
            logger.debug(f"Skipping degenerate ring with {len(ring)} points")
            continue
        if Polygon(ring).area == 0:
            logger.debug("Skipping ring with no area")
            continue
        if LinearRing(ring).is_ccw:
            shells.append(ring)
        else:
            holes.append(ring)

    interiors = {i: [] for i in range(len(shells))}
    shell_polygons = [Polygon(shell) for shell in shells]
    for hole in holes:
        hole_polygon = Polygon(hole)
        owners = [i for i, polygon in enumerate(shell_polygons) if polygon.covers(hole_polygon)]
        if owners:
            owner = min(owners, key=lambda i: shell_polygons[i].area)
            interiors[owner].append(hole)
        else:
            shells.append(hole)
            interiors[len(shells) - 1] = []

    return MultiPolygon([Polygon(shell, interiors[i]) for i, shell in enumerate(shells)])


def data_coverage(rings: List[List[Point]], points: List[Point]) -> float:
    """
    Fraction of points inside or on the boundary of the rings.

    Points on degenerate rings (collinear input) are measured against the
    ring lines instead.
    """
    if not points or not rings:
        return 0.0

    geometry = rings_to_geometry(rings)
    if geometry.is_empty:
        geometry = shapely.MultiLineString([ring for ring in rings if len(set(ring)) >= 2])

    candidates = shapely.points(np.asarray(points, dtype=float))
    covered = shapely.dwithin(geometry, candidates, EPSILON)
    return float(np.count_nonzero(covered)) / len(points)
