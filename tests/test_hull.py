"""
Tests for the hull module.
"""

import numpy as np
import pytest
import shapely
from shapely.geometry import LinearRing, Polygon

from nsidc.bounds.errors import InsufficientPointsError
from nsidc.bounds.hull import convex_hull, gift_wrap, monotone_chain
from nsidc.bounds.models import HullAlgorithm, Point


@pytest.fixture
def square_with_center():
    return [(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.5)]


@pytest.fixture(params=[1, 7, 42])
def random_cloud(request):
    rng = np.random.default_rng(request.param)
    return rng.normal(size=(250, 2)) * [10.0, 3.0] + [100.0, -40.0]


UNIT_SQUARE = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1), Point(0, 0)]


class TestMonotoneChain:
    """Test suite for the monotone chain convex hull."""

    def test_square_excludes_interior_point(self, square_with_center):
        assert monotone_chain(square_with_center) == UNIT_SQUARE

    def test_unsorted_input(self, square_with_center):
        assert monotone_chain(square_with_center[::-1]) == UNIT_SQUARE

    def test_collinear_points(self):
        ring = monotone_chain([(1, 1), (0, 0), (2, 2)])
        assert ring == [Point(0, 0), Point(2, 2), Point(0, 0)]

    def test_collinear_edge_points_skipped(self):
        ring = monotone_chain([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)])
        assert Point(1, 0) not in ring
        assert len(ring) == 5

    def test_two_points(self):
        assert monotone_chain([(0, 0), (3, 4)]) == [Point(0, 0), Point(3, 4), Point(0, 0)]

    def test_too_few_points(self):
        with pytest.raises(InsufficientPointsError):
            monotone_chain([(1, 1), (1, 1)])


class TestGiftWrap:
    """Test suite for the package wrap convex hull."""

    def test_square_excludes_interior_point(self, square_with_center):
        assert gift_wrap(square_with_center) == UNIT_SQUARE

    def test_collinear_points(self):
        ring = gift_wrap([(0, 0), (1, 1), (2, 2)])
        assert ring == [Point(0, 0), Point(2, 2), Point(0, 0)]

    def test_collinear_edge_points_skipped(self):
        ring = gift_wrap([(0, 0), (1, 0), (2, 0), (2, 2), (1, 2), (0, 2)])
        assert ring == [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2), Point(0, 0)]

    def test_starts_at_minimum_y(self):
        ring = gift_wrap([(0, 3), (1, 0), (2, 1), (-1, 1)])
        assert ring[0] == Point(1, 0)
        assert ring[-1] == Point(1, 0)

    def test_minimum_y_tie(self):
        ring = gift_wrap([(1, 0), (0, 0), (2, 1)])
        assert ring == [Point(1, 0), Point(2, 1), Point(0, 0), Point(1, 0)]

    def test_start_on_bottom_edge_is_kept(self):
        """The first minimum-y point stays a vertex even between two others."""
        points = [(1, 0), (0, 0), (2, 0), (1, 1)]

        assert gift_wrap(points) == [Point(1, 0), Point(2, 0), Point(1, 1), Point(0, 0), Point(1, 0)]
        assert Point(1, 0) not in monotone_chain(points)


class TestConvexHullProperties:
    """Properties that hold for any point cloud."""

    @pytest.mark.parametrize("algorithm", list(HullAlgorithm))
    def test_closed_valid_ccw(self, random_cloud, algorithm):
        ring = convex_hull(random_cloud, algorithm)

        assert ring[0] == ring[-1]
        assert Polygon(ring).is_valid
        assert LinearRing(ring).is_ccw

    @pytest.mark.parametrize("algorithm", list(HullAlgorithm))
    def test_covers_every_point(self, random_cloud, algorithm):
        polygon = Polygon(convex_hull(random_cloud, algorithm))
        assert shapely.covers(polygon, shapely.points(random_cloud)).all()

    @pytest.mark.parametrize("algorithm", list(HullAlgorithm))
    def test_matches_shapely(self, random_cloud, algorithm):
        ring = convex_hull(random_cloud, algorithm)
        expected = shapely.MultiPoint(random_cloud).convex_hull
        assert Polygon(ring).equals(expected)

    def test_algorithms_agree(self, random_cloud):
        """Holds for points in general position; see test_start_on_bottom_edge_is_kept."""
        chain = monotone_chain(random_cloud)
        wrap = gift_wrap(random_cloud)
        assert set(chain) == set(wrap)
        assert len(chain) == len(wrap)


def test_convex_hull_accepts_algorithm_name(square_with_center):
    assert convex_hull(square_with_center, "gift_wrap") == UNIT_SQUARE


def test_convex_hull_rejects_unknown_algorithm(square_with_center):
    with pytest.raises(ValueError):
        convex_hull(square_with_center, "quickhull")
