"""
Tests for the writers module.
"""

import io
import json

import pytest

from nsidc.bounds.models import Point
from nsidc.bounds.writers import GMT_HEADER, geojson_feature, write_rings


@pytest.fixture
def rings():
    return [
        [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 0)],
        [Point(5, 5), Point(6, 5), Point(6, 6), Point(5, 5)],
    ]


def write(rings, **kwargs):
    out = io.StringIO()
    write_rings(rings, out, **kwargs)
    return out.getvalue()


def test_text(rings):
    lines = write(rings).splitlines()

    assert lines[0] == ">"
    assert lines[1] == "0.000000 0.000000"
    assert lines[5] == ">"
    assert lines.count(">") == 2
    assert len(lines) == 10


def test_text_is_default_for_format_name(rings):
    assert write(rings, fmt="text") == write(rings)


class TestGmt:
    """Test suite for OGR/GMT output."""

    def test_header(self, rings):
        output = write(rings, fmt="gmt", name="survey")

        assert output.startswith(GMT_HEADER)
        assert output.count("# @Dsurvey\n") == 2
        assert output.count("# @P\n") == 2
        assert "6.000000 6.000000\n" in output

    def test_no_header(self, rings):
        output = write(rings, fmt="gmt", header=False)

        assert "@VGMT1.0" not in output
        assert output.startswith(">\n# @Dbounds\n# @P\n")


class TestGeojson:
    """Test suite for GeoJSON output."""

    def test_feature_collection(self, rings):
        document = json.loads(write(rings, fmt="geojson", name="survey"))

        assert document["type"] == "FeatureCollection"
        feature = document["features"][0]
        assert feature["properties"] == {"Name": "survey"}
        assert feature["geometry"]["type"] == "MultiPolygon"
        assert len(feature["geometry"]["coordinates"]) == 2
        assert feature["geometry"]["coordinates"][0][0][1] == [1, 0]

    def test_no_header_writes_feature(self, rings):
        document = json.loads(write(rings, fmt="geojson", header=False))
        assert document == geojson_feature(rings, "bounds")


def test_unknown_format(rings):
    with pytest.raises(ValueError):
        write(rings, fmt="shapefile")
