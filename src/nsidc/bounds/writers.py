"""
Ring writers for plain text, GMT (OGR/GMT vector) and GeoJSON output.
"""

import json
from typing import List, TextIO, Union

from nsidc.bounds.models import OutputFormat, Point

GMT_HEADER = "# @VGMT1.0 @GMULTIPOLYGON\n# @NName\n# @Tstring\n# FEATURE_DATA\n"


def write_rings(
    rings: List[List[Point]],
    out: TextIO,
    fmt: Union[OutputFormat, str] = OutputFormat.TEXT,
    name: str = "bounds",
    header: bool = True,
) -> None:
    """
    Write rings to a text stream.

    Args:
        rings: Closed rings to write
        out: Destination stream
        fmt: Output format
        name: Layer/feature name used by the GMT and GeoJSON formats
        header: Whether to write the format's leading header; without it
            the output can be appended to an existing layer
    """
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.GMT:
        write_gmt(rings, out, name, header)
    elif fmt is OutputFormat.GEOJSON:
        write_geojson(rings, out, name, header)
    else:
        write_text(rings, out)


def write_text(rings, out):
    for ring in rings:
        out.write(">\n")
        for point in ring:
            out.write(f"{point.x:f} {point.y:f}\n")


def write_gmt(rings, out, name, header=True):
    if header:
        out.write(GMT_HEADER)
    for ring in rings:
        out.write(f">\n# @D{name}\n# @P\n")
        for point in ring:
            out.write(f"{point.x:f} {point.y:f}\n")


def geojson_feature(rings, name) -> dict:
    """A GeoJSON Feature holding the rings as one MultiPolygon."""
    return {
        "type": "Feature",
        "properties": {"Name": name},
        "geometry": {
            "type": "MultiPolygon",
            "coordinates": [[[[p.x, p.y] for p in ring]] for ring in rings],
        },
    }


def write_geojson(rings, out, name, header=True):
    """
    Write a FeatureCollection, or just the Feature when `header` is False.
    """
    feature = geojson_feature(rings, name)
    if header:
        document = {"type": "FeatureCollection", "features": [feature]}
    else:
        document = feature
    json.dump(document, out)
    out.write("\n")
