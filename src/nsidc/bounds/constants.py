# Tolerances
EPSILON = 1e-9
ANGLE_EPSILON = 1e-12
# Corner matching in the block tracer is scaled by the grid increment
CORNER_TOLERANCE = 1e-6

# Concave hull
DEFAULT_GROWTH_FACTOR = 2.0

# Default configuration values
DEFAULT_METHOD = 'convex'
DEFAULT_ALGORITHM = 'monotone_chain'
DEFAULT_RECORD = 'xy'
DEFAULT_SKIP = 0
DEFAULT_DISTANCE = 0.0
DEFAULT_INCREMENT = 0.0
DEFAULT_TIMEOUT = 0.0
DEFAULT_OUTPUT_FORMAT = 'text'
DEFAULT_LAYER_NAME = 'bounds'
DEFAULT_HEADER = True

# Configuration sections
INPUT_SECTION_NAME = 'Input'
BOUNDARY_SECTION_NAME = 'Boundary'
OUTPUT_SECTION_NAME = 'Output'

# Logging
LOGGER_NAME = 'nsidc.bounds'
