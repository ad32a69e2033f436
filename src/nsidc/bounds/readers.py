"""
Point stream reader.

Reads xy records from delimited text (a file path or an open stream),
guessing the delimiter from the first data line when none is given.
"""

import io
import logging
import re

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DELIMITER_CANDIDATES = [",", "\t", ";", "|"]
WHITESPACE = r"\s+"


def guess_delimiter(line: str) -> str:
    """
    Guess the field delimiter of a record.

    Returns the first of comma, tab, semicolon or pipe found in the line,
    otherwise a whitespace pattern.
    """
    for candidate in DELIMITER_CANDIDATES:
        if candidate in line:
            return candidate
    return WHITESPACE


def record_columns(record: str):
    """
    Column positions of x and y in a record layout such as 'xy' or 'zdyx'.

    Raises:
        ValueError: If the layout does not name both an x and a y field
    """
    if "x" not in record or "y" not in record:
        raise ValueError(f"Record layout '{record}' must contain both 'x' and 'y'")
    return record.index("x"), record.index("y")


def read_points(source, delimiter=None, record="xy", skip=0) -> np.ndarray:
    """
    Read xy points from delimited text.

    Parameters:
    -----------
    source : str, Path or text stream
        Where to read the records from
    delimiter : str, optional
        Field delimiter; guessed from the first data line if omitted
    record : str
        Field layout; the positions of 'x' and 'y' select the columns
    skip : int
        Number of leading lines to ignore

    Returns:
    --------
    numpy.ndarray : (n, 2) array of x, y values; unparseable values are NaN
    """
    x_col, y_col = record_columns(record)

    if hasattr(source, "read"):
        text = source.read()
    else:
        with open(source) as f:
            text = f.read()

    lines = text.splitlines()[skip:]
    data = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
    if not data:
        logger.warning("No point records found")
        return np.empty((0, 2))

    if delimiter is None:
        delimiter = guess_delimiter(data[0])
        logger.debug(f"Guessed delimiter {delimiter!r}")

    df = pd.read_csv(
        io.StringIO("\n".join(line.strip() for line in data)),
        sep=delimiter if delimiter == WHITESPACE else re.escape(delimiter),
        engine="python",
        header=None,
        usecols=lambda column: column in (x_col, y_col),
        dtype=str,
    )

    for column in (x_col, y_col):
        if column not in df.columns:
            raise ValueError(f"Records have no field {column + 1} for layout '{record}'")

    points = np.column_stack(
        (
            pd.to_numeric(df[x_col], errors="coerce").to_numpy(dtype=float),
            pd.to_numeric(df[y_col], errors="coerce").to_numpy(dtype=float),
        )
    )
    logger.info(f"Read {len(points)} point records")
    return points
