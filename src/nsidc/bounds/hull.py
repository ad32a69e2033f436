"""
Convex hull algorithms.

Two independent implementations are provided:

1. **monotone_chain**: Andrew's monotone chain, O(n log n)
   - Default convex hull
   - Builds lower and upper chains from x-sorted points

2. **gift_wrap**: package wrap by minimal polar angle, O(n*h)
   - Also the guaranteed-terminating fallback for the concave hull

Both return a closed ring (first point repeated as last) in
counter-clockwise order.
"""

import logging
from typing import List, Union

from nsidc.bounds.constants import ANGLE_EPSILON
from nsidc.bounds.geometry import TWO_PI, as_points, distance, heading, orientation
from nsidc.bounds.models import HullAlgorithm, Orientation, Point

logger = logging.getLogger(__name__)


def monotone_chain(points) -> List[Point]:
    """
    Monotone chain convex hull.

    The points are sorted by x, then y, before the chains are built, so
    callers do not need to pre-sort. Collinear input reduces to the
    degenerate ring [first, last, first].

    Parameters:
    -----------
    points : array-like
        Iterable of (x, y) pairs

    Returns:
    --------
    list of Point : closed counter-clockwise hull ring
    """
    pts = sorted(as_points(points))

    lower = _chain(pts)
    upper = _chain(reversed(pts))

    # The last point of each chain is the first point of the other
    ring = lower[:-1] + upper[:-1]
    ring.append(ring[0])
    return ring


def _chain(points) -> List[Point]:
    chain = []
    for point in points:
        while len(chain) >= 2 and orientation(chain[-2], chain[-1], point) is not Orientation.LEFT:
            chain.pop()
        chain.append(point)
    return chain


def gift_wrap(points) -> List[Point]:
    """
    Package wrap convex hull.

    Starts from the point with minimum y (first occurrence on ties) and
    repeatedly picks the point whose polar angle from the current point is
    the smallest angle strictly greater than the previous hull edge's
    angle. Among candidates with the same angle the farthest wins, so
    collinear boundary points are not emitted as vertices. The ring is
    complete when the start point is selected again.

    When several points share the minimum y and the first of them lies
    between the others, it stays in the ring as a vertex on the bottom edge,
    where monotone_chain would leave it out.

    Args:
        points: Iterable of (x, y) pairs

    Returns:
        Closed counter-clockwise hull ring
    """
    pts = as_points(points)
    start = min(pts, key=lambda p: p.y)

    remaining = [p for p in pts if p != start]
    ring = [start]
    current = start
    previous_angle = None

    while True:
        best = None
        best_angle = None
        best_distance = 0.0

        for candidate in remaining:
            angle = heading(current, candidate)
            if previous_angle is not None and angle <= previous_angle + ANGLE_EPSILON:
                continue
            best, best_angle, best_distance = _better(
                candidate, angle, current, best, best_angle, best_distance
            )

        if len(ring) > 1:
            # The start point may always close the ring
            angle = heading(current, start)
            if angle <= previous_angle + ANGLE_EPSILON:
                angle += TWO_PI
            best, best_angle, best_distance = _better(
                start, angle, current, best, best_angle, best_distance
            )

        ring.append(best)
        if best == start:
            break

        remaining.remove(best)
        current = best
        previous_angle = best_angle

    logger.debug(f"Package wrap found {len(ring) - 1} hull points")
    return ring


def _better(candidate, angle, current, best, best_angle, best_distance):
    """Pick between the current best and a candidate: smaller angle, then farther."""
    dist = distance(current, candidate)
    if (
        best is None
        or angle < best_angle - ANGLE_EPSILON
        or (abs(angle - best_angle) <= ANGLE_EPSILON and dist > best_distance)
    ):
        return candidate, angle, dist
    return best, best_angle, best_distance


def convex_hull(points, algorithm: Union[HullAlgorithm, str] = HullAlgorithm.MONOTONE_CHAIN) -> List[Point]:
    """Convex hull ring using the requested algorithm."""
    algorithm = HullAlgorithm(algorithm)
    if algorithm is HullAlgorithm.GIFT_WRAP:
        return gift_wrap(points)
    return monotone_chain(points)
