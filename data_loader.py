from typing import List, Tuple

import numpy as np
import pandas as pd

import seam_utils.logging as logging
from data_structures import Image
from exceptions import ParseError
from seam_utils.decorators import log_and_time

logger = logging.getLogger(__name__)


def parse_header(line: str) -> Tuple[int, int, int]:
    """'<n> <width> <height>' -> (n, width, height)"""
    parts = line.split()
    if len(parts) != 3:
        raise ParseError(f"Header must be '<n> <width> <height>', got {line.strip()!r}")
    try:
        n, width, height = (int(p) for p in parts)
    except ValueError:
        raise ParseError(f"Header values must be integers, got {line.strip()!r}") from None
    if n < 1 or width < 1 or height < 1:
        raise ParseError(f"Header values must be positive, got n={n} width={width} height={height}")
    return n, width, height


@log_and_time("load_images", error_cls=ParseError)
def load_images(path) -> List[Image]:
    """
    Reads the text input format:
      line 1: '<n> <width> <height>'
      n lines of width*height*3 integers, row-major, R G B per pixel.
    """
    logger.info("CHECKPOINT: Starting load_images from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            header = fh.readline()
    except OSError as e:
        raise ParseError(f"Cannot read input file {path}: {e}") from e
    if not header.strip():
        raise ParseError(f"Input file {path} has no header line")

    n, width, height = parse_header(header)
    per_image = width * height * 3

    try:
        df = pd.read_csv(path, sep=r"\s+", header=None, skiprows=1, dtype=str)
    except pd.errors.EmptyDataError:
        raise ParseError(f"Expected {n} image lines, found none") from None
    except pd.errors.ParserError as e:
        raise ParseError(f"Malformed pixel data: {e}") from e

    if len(df) != n:
        raise ParseError(f"Expected {n} image lines, found {len(df)}")
    if df.shape[1] != per_image or df.isna().any().any():
        counts = df.notna().sum(axis=1).tolist()
        raise ParseError(f"Expected {per_image} values per image line, found {counts}")

    # plain unsigned decimal tokens only, no signs, exponents or fractions
    if not df.apply(lambda col: col.str.fullmatch(r"[0-9]+")).all().all():
        raise ParseError("Pixel data contains non-integer values")
    data = df.astype(np.int64).to_numpy()
    if data.min() < 0 or data.max() > 255:
        raise ParseError("Pixel values must be within [0, 255]")

    grid = data.reshape(n, height, width, 3)
    images = [Image(grid[k]) for k in range(n)]
    logger.info("CHECKPOINT: load_images done. n=%d, width=%d, height=%d", n, width, height)
    return images
