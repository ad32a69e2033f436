"""
Tests for the readers module.
"""

import io

import numpy as np
import pytest

from nsidc.bounds.readers import WHITESPACE, guess_delimiter, read_points, record_columns


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1.0,2.0", ","),
        ("1.0\t2.0", "\t"),
        ("1.0;2.0", ";"),
        ("1.0|2.0", "|"),
        ("1.0   2.0", WHITESPACE),
        ("1.0 2.0", WHITESPACE),
    ],
)
def test_guess_delimiter(line, expected):
    assert guess_delimiter(line) == expected


def test_record_columns():
    assert record_columns("xy") == (0, 1)
    assert record_columns("zdyx") == (3, 2)


def test_record_columns_needs_x_and_y():
    with pytest.raises(ValueError):
        record_columns("xz")


class TestReadPoints:
    """Test suite for reading point records."""

    def test_comma_separated(self):
        points = read_points(io.StringIO("0,0\n1.5,2\n-3,4e1\n"))
        np.testing.assert_array_equal(points, [[0, 0], [1.5, 2], [-3, 40]])

    def test_whitespace_separated(self):
        points = read_points(io.StringIO("  0 0\n1\t\t2\n3    4\n"))
        np.testing.assert_array_equal(points, [[0, 0], [1, 2], [3, 4]])

    def test_explicit_delimiter(self):
        points = read_points(io.StringIO("0|1\n2|3\n"), delimiter="|")
        np.testing.assert_array_equal(points, [[0, 1], [2, 3]])

    def test_record_layout(self):
        points = read_points(io.StringIO("9,8,2,1\n9,8,4,3\n"), record="zdyx")
        np.testing.assert_array_equal(points, [[1, 2], [3, 4]])

    def test_skip_header(self):
        points = read_points(io.StringIO("lon,lat\n1,2\n3,4\n"), skip=1)
        np.testing.assert_array_equal(points, [[1, 2], [3, 4]])

    def test_comments_and_blank_lines(self):
        points = read_points(io.StringIO("# survey\n1,2\n\n# more\n3,4\n"))
        np.testing.assert_array_equal(points, [[1, 2], [3, 4]])

    def test_unparseable_values_are_nan(self):
        points = read_points(io.StringIO("1,2\nfoo,4\n"))
        assert points.shape == (2, 2)
        assert np.isnan(points[1, 0])
        assert points[1, 1] == 4

    def test_no_records(self):
        points = read_points(io.StringIO("# nothing here\n\n"))
        assert points.shape == (0, 2)

    def test_from_path(self, tmp_path):
        source = tmp_path / "points.xy"
        source.write_text("0 0\n1 1\n")
        np.testing.assert_array_equal(read_points(str(source)), [[0, 0], [1, 1]])

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_points(str(tmp_path / "missing.xy"))
