"""
Bounding region helpers.

Regions are computed fresh from the data for every call unless a valid
region is supplied by the caller. An invalid supplied region is never an
error; it is replaced by one computed from the points.
"""

import logging
import math
from typing import List, Optional, Sequence

from nsidc.bounds.models import Point, Region

logger = logging.getLogger(__name__)


def compute_region(points: Sequence[Point]) -> Region:
    """Single pass over the points tracking the running min/max of x and y."""
    first = points[0]
    xmin = xmax = first.x
    ymin = ymax = first.y

    for point in points[1:]:
        if point.x < xmin:
            xmin = point.x
        elif point.x > xmax:
            xmax = point.x
        if point.y < ymin:
            ymin = point.y
        elif point.y > ymax:
            ymax = point.y

    return Region(xmin, xmax, ymin, ymax)


def validate_region(region: Optional[Region]) -> bool:
    """Accept a region only if xmin < xmax and ymin < ymax."""
    if region is None:
        return False
    return region.xmin < region.xmax and region.ymin < region.ymax


def resolve_region(points: Sequence[Point], region: Optional[Region] = None):
    """
    Return the region to work in and whether it was supplied by the caller.

    Returns:
        Tuple of (region, user_supplied)
    """
    if validate_region(region):
        logger.info(f"Using user supplied region: {region}")
        return region, True

    if region is not None:
        logger.debug(f"Ignoring invalid region {region}, scanning points instead")

    logger.info("Scanning xy data for region")
    return compute_region(points), False


def parse_region(text: str) -> Optional[Region]:
    """
    Parse a 'west/east/south/north' string.

    Returns None for an empty string.

    Raises:
        ValueError: If the string does not hold four numbers
    """
    if not text:
        return None

    parts = text.split("/")
    if len(parts) != 4:
        raise ValueError(f"Region must be west/east/south/north, got '{text}'")

    xmin, xmax, ymin, ymax = (float(part) for part in parts)
    return Region(xmin, xmax, ymin, ymax)


def diagonal(region: Region) -> float:
    return math.hypot(region.width, region.height)


def estimate_distance(points: Sequence[Point], region: Optional[Region] = None) -> float:
    """
    Quick density estimate for the concave hull distance threshold:
    bounding-box area divided by the number of points.

    Only data lying on a horizontal or vertical line has zero area, and
    therefore a zero estimate; other collinear data has a bounding box.
    """
    if not validate_region(region):
        region = compute_region(points)
    return region.area / len(points)


def bounding_box(points: Sequence[Point], region: Optional[Region] = None) -> List[Point]:
    """Counter-clockwise closed rectangle around the points (or the given region)."""
    if not validate_region(region):
        region = compute_region(points)

    return [
        Point(region.xmin, region.ymin),
        Point(region.xmax, region.ymin),
        Point(region.xmax, region.ymax),
        Point(region.xmin, region.ymax),
        Point(region.xmin, region.ymin),
    ]
