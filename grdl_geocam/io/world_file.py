# -*- coding: utf-8 -*-
"""
World File I/O - Read and write six-coefficient raster world files.

A world file (``.tfw``, ``.jgw``, ``.wld``, ...) stores an affine raster
transform as six decimal numbers, in order::

    A  pixel width (x scale)
    D  row rotation
    B  column rotation
    E  pixel height (y scale, negative for north-up)
    C  x of the upper-left pixel
    F  y of the upper-left pixel

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import logging
from typing import Sequence, Tuple

from grdl_geocam.exceptions import FormatError
from grdl_geocam.utils.constants import WORLD_FILE_PRECISION

log = logging.getLogger(__name__)


def read_world_file(filename: str) -> Tuple[float, float, float, float, float, float]:
    """
    Read the six coefficients of a world file.

    Parameters
    ----------
    filename : str
        Path to the world file.

    Returns
    -------
    tuple of float
        (px_w, row_rot, col_rot, px_h, ox, oy).

    Raises
    ------
    FormatError
        If the file cannot be opened or does not start with six numbers.
    """
    try:
        with open(filename, 'r') as f:
            content = f.read()
    except OSError as e:
        raise FormatError(f"Cannot open world file {filename}: {e}") from e

    tokens = content.split()
    if len(tokens) < 6:
        raise FormatError(
            f"World file {filename} holds {len(tokens)} values, expected 6"
        )
    try:
        values = tuple(float(t) for t in tokens[:6])
    except ValueError as e:
        raise FormatError(f"Corrupt world file {filename}: {e}") from e

    log.debug("Read world file %s: %s", filename, values)
    return values


def write_world_file(filename: str, coefficients: Sequence[float]) -> None:
    """
    Write six coefficients as a world file, one per line.

    Parameters
    ----------
    filename : str
        Output path.
    coefficients : sequence of float
        (px_w, row_rot, col_rot, px_h, ox, oy).

    Raises
    ------
    ValueError
        If ``coefficients`` does not hold six values.
    """
    if len(coefficients) != 6:
        raise ValueError(f"World file requires 6 coefficients, got {len(coefficients)}")
    with open(filename, 'w') as f:
        for value in coefficients:
            f.write(f"{float(value):.{WORLD_FILE_PRECISION}g}\n")


__all__ = ["read_world_file", "write_world_file"]
