"""
Geometry primitives shared by the boundary algorithms.

Orientation, segment intersection and point-in-polygon tests, along with
helpers that coerce raw coordinate input into Points.
"""

import logging
import math
from typing import Iterable, List, Sequence

import numpy as np

from nsidc.bounds.constants import EPSILON
from nsidc.bounds.errors import InsufficientPointsError
from nsidc.bounds.models import Orientation, Point, Segment

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi


def as_points(points) -> List[Point]:
    """
    Coerce raw input into a list of distinct, finite Points.

    Rows with a NaN or infinite coordinate are discarded, then exact
    duplicates are removed keeping the first occurrence.

    Parameters:
    -----------
    points : array-like
        Iterable of (x, y) pairs or an (n, >=2) array

    Returns:
    --------
    list of Point in input order

    Raises:
    -------
    InsufficientPointsError : if fewer than 2 distinct points remain
    """
    coords = np.asarray(points, dtype=float)
    if coords.size == 0:
        raise InsufficientPointsError(0)
    if coords.ndim != 2 or coords.shape[1] < 2:
        raise ValueError(f"Expected (x, y) pairs, got an array of shape {coords.shape}")
    coords = coords[:, :2]

    mask = np.isfinite(coords).all(axis=1)
    if not mask.all():
        logger.debug(f"Discarding {int((~mask).sum())} non-finite points")

    distinct = list(dict.fromkeys(Point(float(x), float(y)) for x, y in coords[mask]))
    if len(distinct) < 2:
        raise InsufficientPointsError(len(distinct))

    return distinct


def points_equal(p1: Point, p2: Point, tolerance: float = EPSILON) -> bool:
    """Return True if both coordinates differ by no more than `tolerance`."""
    return abs(p1.x - p2.x) <= tolerance and abs(p1.y - p2.y) <= tolerance


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def cross(p1: Point, p2: Point, p3: Point) -> float:
    """
    Twice the signed area of the triangle p1, p2, p3.

    Positive for a counter-clockwise turn, negative for clockwise and zero
    when the points are collinear.
    """
    return (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)


def orientation(p1: Point, p2: Point, p3: Point) -> Orientation:
    area = cross(p1, p2, p3)
    if abs(area) <= EPSILON * EPSILON:
        return Orientation.COLLINEAR
    return Orientation.LEFT if area > 0 else Orientation.RIGHT


def heading(p1: Point, p2: Point) -> float:
    """Polar angle of the direction p1 -> p2, in [0, 2pi)."""
    angle = math.atan2(p2.y - p1.y, p2.x - p1.x)
    if angle < 0:
        angle += TWO_PI
    return angle


def turning_angle(previous: Point, current: Point, candidate: Point) -> float:
    """
    Angle swept from the incoming edge previous -> current to the
    candidate edge current -> candidate, measured so that the sharpest
    right turn is smallest. Continuing straight ahead gives pi; doubling
    back along the incoming edge gives 0.
    """
    incoming = math.atan2(current.y - previous.y, current.x - previous.x)
    outgoing = math.atan2(current.y - candidate.y, current.x - candidate.x)
    return (outgoing - incoming) % TWO_PI


def on_segment(point: Point, segment: Segment, tolerance: float = EPSILON) -> bool:
    """Return True if `point` lies on `segment`, endpoints included."""
    start, end = segment
    if (
        point.x < min(start.x, end.x) - tolerance
        or point.x > max(start.x, end.x) + tolerance
        or point.y < min(start.y, end.y) - tolerance
        or point.y > max(start.y, end.y) + tolerance
    ):
        return False

    length = distance(start, end)
    if length <= tolerance:
        return distance(start, point) <= tolerance

    # Distance from the supporting line
    return abs(cross(start, end, point)) / length <= tolerance


def segments_intersect(s1: Segment, s2: Segment) -> bool:
    """
    Return True if the two segments cross or touch.

    Segments sharing an endpoint, or collinear segments that overlap,
    count as intersecting.
    """
    o1 = orientation(s1.start, s1.end, s2.start)
    o2 = orientation(s1.start, s1.end, s2.end)
    o3 = orientation(s2.start, s2.end, s1.start)
    o4 = orientation(s2.start, s2.end, s1.end)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear and degenerate cases
    if o1 is Orientation.COLLINEAR and on_segment(s2.start, s1):
        return True
    if o2 is Orientation.COLLINEAR and on_segment(s2.end, s1):
        return True
    if o3 is Orientation.COLLINEAR and on_segment(s1.start, s2):
        return True
    if o4 is Orientation.COLLINEAR and on_segment(s1.end, s2):
        return True

    return False


def ring_segments(ring: Sequence[Point]) -> Iterable[Segment]:
    """Yield the edges of a ring, closing it if the last point is not the first."""
    for i in range(len(ring) - 1):
        yield Segment(ring[i], ring[i + 1])
    if len(ring) > 2 and not points_equal(ring[0], ring[-1]):
        yield Segment(ring[-1], ring[0])


def point_in_polygon(
    point: Point,
    ring: Sequence[Point],
    ray_vertex_tie: bool = False,
    tolerance: float = EPSILON,
) -> bool:
    """
    Test whether a point lies inside a ring, boundary included.

    A point within `tolerance` of any ring edge is inside. Otherwise a ray
    is cast from the point towards +x and the ring edges it crosses are
    counted; an odd count means inside. A ring vertex lying exactly on the
    ray is counted for only one of its two edges (half-open rule), so rays
    grazing a vertex do not flip the parity twice.

    Args:
        point: The point to test
        ring: Polygon vertices, closed or not
        ray_vertex_tie: If True, a ray passing through two or more ring
            vertices reports the point as inside regardless of parity
        tolerance: Distance within which a point is on the boundary

    Returns:
        True if the point is inside or on the ring
    """
    edges = list(ring_segments(ring))

    for edge in edges:
        if on_segment(point, edge, tolerance):
            return True

    if ray_vertex_tie:
        touched = {
            vertex
            for vertex in ring
            if abs(vertex.y - point.y) <= tolerance and vertex.x >= point.x
        }
        if len(touched) >= 2:
            return True

    inside = False
    for start, end in edges:
        if (start.y > point.y) != (end.y > point.y):
            x_cross = start.x + (point.y - start.y) * (end.x - start.x) / (end.y - start.y)
            if x_cross > point.x:
                inside = not inside

    return inside
