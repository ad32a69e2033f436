import logging
import sys
from typing import TextIO

from funcy import decorator

from nsidc.bounds import config
from nsidc.bounds import constants
from nsidc.bounds import readers
from nsidc.bounds import writers
from nsidc.bounds.boundary import deadline, generate_boundary


CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"

def init_logging(verbose: bool = False, log_file: str = None):
    """
    Logs to stderr (stdout carries the boundary) and, optionally, to a file.
    """
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        logfile_handler = logging.FileHandler(log_file, "w")
        logfile_handler.setLevel(logging.DEBUG)
        logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
        logger.addHandler(logfile_handler)

@decorator
def log(call):
    logging.getLogger(constants.LOGGER_NAME).debug(call._func.__name__)
    return call()

@log
def read_points(configuration: config.Config, source):
    return readers.read_points(
        source,
        delimiter=configuration.delimiter,
        record=configuration.record,
        skip=configuration.skip,
    )

@log
def boundary(configuration: config.Config, points):
    cancel = deadline(configuration.timeout) if configuration.timeout > 0 else None
    return generate_boundary(
        points,
        method=configuration.method,
        distance=configuration.distance,
        increment=configuration.increment or None,
        region=configuration.boundary_region(),
        algorithm=configuration.algorithm,
        growth_factor=configuration.growth_factor,
        cancel=cancel,
    )

@log
def write_rings(configuration: config.Config, rings, out: TextIO):
    writers.write_rings(
        rings,
        out,
        fmt=configuration.output_format,
        name=configuration.layer_name,
        header=configuration.header,
    )

def process(configuration: config.Config, source, out: TextIO) -> dict:
    """
    Reads the points from 'source', generates the configured boundary and
    writes it to 'out'. Returns the boundary metadata.
    """
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.info(f"Working on {getattr(source, 'name', source)}")

    points = read_points(configuration, source)
    rings, metadata = boundary(configuration, points)
    write_rings(configuration, rings, out)

    logger.info(f"Processed {metadata['points']} points into {metadata['rings']} rings "
                f"with {metadata['vertices']} vertices "
                f"({metadata['data_coverage']:.0%} coverage)")
    return metadata
