__version__ = "v0.5.0"


__all__ = [
    "__version__",
    "block",
    "boundary",
    "concave",
    "config",
    "constants",
    "geometry",
    "hull",
    "readers",
    "region",
    "writers",
    "BoundaryMethod",
    "HullAlgorithm",
    "Point",
    "Region",
    "block_boundary",
    "bounding_box",
    "concave_hull",
    "convex_hull",
    "generate_boundary",
]

from . import block
from . import boundary
from . import concave
from . import config
from . import constants
from . import geometry
from . import hull
from . import readers
from . import region
from . import writers
from .block import block_boundary
from .boundary import generate_boundary
from .concave import concave_hull
from .hull import convex_hull
from .models import BoundaryMethod, HullAlgorithm, Point, Region
from .region import bounding_box
