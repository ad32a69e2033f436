"""
Concave hull by distance-threshold package wrap.

The wrap walks the boundary like the gift wrap convex hull, but each step
only considers points within a distance threshold of the current point and
rejects any candidate whose edge would cross the ring built so far. An
attempt that gets stuck, or whose ring leaves input points outside, is
retried from scratch with a larger threshold. When growing the threshold
can no longer help, the convex hull is returned instead, so a boundary
enclosing every input point is always produced.
"""

import dataclasses
import logging
import math
from typing import Callable, List, Optional, Sequence

from nsidc.bounds.constants import DEFAULT_GROWTH_FACTOR
from nsidc.bounds.errors import BoundaryCancelled
from nsidc.bounds.geometry import (
    as_points,
    distance as point_distance,
    heading,
    point_in_polygon,
    segments_intersect,
    turning_angle,
)
from nsidc.bounds.hull import gift_wrap
from nsidc.bounds.models import Point, Region, Segment
from nsidc.bounds.region import compute_region, diagonal, estimate_distance

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ConcaveHullResult:
    """
    Outcome of the adaptive concave hull.

    `distance` is the threshold that produced the ring (the last one tried
    when the convex hull fallback was used) and `attempts` counts the wrap
    attempts made.
    """

    ring: List[Point]
    distance: float
    attempts: int
    fallback: bool = False


def concave_wrap(points: Sequence[Point], threshold: float) -> Optional[List[Point]]:
    """
    A single distance-threshold package wrap attempt.

    Parameters:
    -----------
    points : sequence of Point
        Distinct input points
    threshold : float
        Maximum length of a ring edge

    Returns:
    --------
    list of Point or None
        The closed ring, or None if at some step no candidate was within
        reach without crossing the ring.
    """
    start = min(points, key=lambda p: p.y)
    remaining = [p for p in points if p != start]

    ring = [start]
    edges = []
    previous = None
    current = start

    while True:
        # The start point can close the ring once a triangle is possible
        candidates = remaining + [start] if len(ring) >= 3 else remaining

        best = None
        best_angle = math.inf
        for candidate in candidates:
            if point_distance(current, candidate) > threshold:
                continue

            if previous is None:
                angle = heading(current, candidate)
            else:
                angle = turning_angle(previous, current, candidate)
                if angle <= 0:
                    continue

            if angle >= best_angle:
                continue

            if _crosses(Segment(current, candidate), edges):
                continue

            best, best_angle = candidate, angle

        if best is None:
            return None

        edges.append(Segment(current, best))
        ring.append(best)
        if best == start:
            return ring

        remaining.remove(best)
        previous, current = current, best


def _crosses(segment: Segment, edges: Sequence[Segment]) -> bool:
    """True if `segment` intersects an edge it does not share an endpoint with."""
    for edge in edges:
        if edge.start in segment or edge.end in segment:
            continue
        if segments_intersect(segment, edge):
            return True
    return False


def encloses(ring: Sequence[Point], points: Sequence[Point]) -> bool:
    """True if every point is inside or on the ring."""
    vertices = set(ring)
    return all(p in vertices or point_in_polygon(p, ring) for p in points)


def adaptive_concave_hull(
    points,
    distance: Optional[float] = None,
    region: Optional[Region] = None,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
    cancel: Optional[Callable[[], bool]] = None,
) -> ConcaveHullResult:
    """
    Concave hull that retries with a growing distance threshold.

    Args:
        points: Iterable of (x, y) pairs
        distance: Initial distance threshold. None or 0 estimates one from
            the point density (bounding box area / point count).
        region: Optional region used for the density estimate
        growth_factor: Multiplier applied to the threshold after a failure
        cancel: Optional callable checked once per attempt; returning True
            stops the operation

    Returns:
        ConcaveHullResult holding the ring and how it was found

    Raises:
        ValueError: If distance is negative or not finite, or the growth
            factor is not greater than 1
        InsufficientPointsError: If fewer than 2 distinct points are given
        BoundaryCancelled: If `cancel` returned True
    """
    if distance is not None and (not math.isfinite(distance) or distance < 0):
        raise ValueError(f"Distance must be a non-negative number, got {distance}")
    if not growth_factor > 1:
        raise ValueError(f"Growth factor must be greater than 1, got {growth_factor}")

    pts = as_points(points)

    if not distance:
        distance = estimate_distance(pts, region)
        logger.info(f"Estimated concave distance: {distance}")

    # Past the data diagonal every point is within reach, growing further
    # cannot change the outcome
    reach = diagonal(compute_region(pts))

    attempts = 0
    while math.isfinite(distance) and distance > 0:
        if cancel is not None and cancel():
            raise BoundaryCancelled(f"Concave hull cancelled after {attempts} attempts")

        attempts += 1
        ring = concave_wrap(pts, distance)

        if ring is not None:
            if encloses(ring, pts):
                logger.info(
                    f"Concave hull found {len(ring) - 1} boundary points "
                    f"at distance {distance} after {attempts} attempts"
                )
                return ConcaveHullResult(ring, distance, attempts)
            logger.debug(f"Ring at distance {distance} leaves points outside")
        else:
            logger.debug(f"No ring found at distance {distance}")

        if distance >= reach:
            break
        distance *= growth_factor

    logger.info("Concave hull did not converge, falling back to a convex hull")
    return ConcaveHullResult(gift_wrap(pts), distance, attempts, fallback=True)


def concave_hull(
    points,
    distance: Optional[float] = None,
    region: Optional[Region] = None,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
    cancel: Optional[Callable[[], bool]] = None,
) -> List[Point]:
    """Concave hull ring; see adaptive_concave_hull."""
    return adaptive_concave_hull(points, distance, region, growth_factor, cancel).ring
