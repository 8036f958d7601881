# -*- coding: utf-8 -*-
"""
Geo Camera Serialization - Versioned binary record of a geo camera.

Record layout (little-endian)::

    int16    version (1)
    uint32   matrix rows
    uint32   matrix cols
    float64  matrix entries, row-major
    ...      coordinate context record (see ``geometry.lvcs``)
    uint8    is_utm
    int32    utm_zone
    int32    hemisphere (1 southern, 0 northern)
    uint8    scale_tag

The version is validated before any other field is decoded.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional

import numpy as np

from grdl_geocam.camera.adapters import UTMMetadata
from grdl_geocam.exceptions import FormatError, UnsupportedVersionError
from grdl_geocam.geometry.lvcs import LocalVerticalCS, read_lvcs, write_lvcs
from grdl_geocam.io.binary import BinaryReader, BinaryWriter
from grdl_geocam.utils.constants import GEO_CAMERA_FORMAT_VERSION


@dataclass
class GeoCameraRecord:
    """Fields of a serialized geo camera."""
    matrix: np.ndarray
    lvcs: Optional[LocalVerticalCS]
    utm: UTMMetadata
    scale_tag: bool


def write_record(stream: BinaryIO, record: GeoCameraRecord) -> None:
    """
    Write a geo camera record.

    Parameters
    ----------
    stream : BinaryIO
        Writable binary stream.
    record : GeoCameraRecord
        Fields to write.
    """
    writer = BinaryWriter(stream)
    matrix = np.asarray(record.matrix, dtype=np.float64)
    rows, cols = matrix.shape

    writer.write_short(GEO_CAMERA_FORMAT_VERSION)
    writer.write_uint(rows)
    writer.write_uint(cols)
    for value in matrix.ravel(order='C'):
        writer.write_double(value)
    write_lvcs(stream, record.lvcs)
    writer.write_bool(record.utm.is_utm)
    writer.write_int(record.utm.utm_zone)
    writer.write_int(1 if record.utm.southern else 0)
    writer.write_bool(record.scale_tag)


def read_record(stream: BinaryIO) -> GeoCameraRecord:
    """
    Read a geo camera record written by ``write_record``.

    Returns
    -------
    GeoCameraRecord

    Raises
    ------
    UnsupportedVersionError
        If the camera or context version is unknown.
    FormatError
        If the stream ends early or the matrix is not 4x4.
    """
    reader = BinaryReader(stream)
    version = reader.read_short()
    if version != GEO_CAMERA_FORMAT_VERSION:
        raise UnsupportedVersionError(version, 'geo camera')

    rows = reader.read_uint()
    cols = reader.read_uint()
    if (rows, cols) != (4, 4):
        raise FormatError(f"Geo camera record holds a {rows}x{cols} matrix, expected 4x4")
    matrix = np.array([reader.read_double() for _ in range(rows * cols)],
                      dtype=np.float64).reshape(rows, cols)

    lvcs = read_lvcs(stream)
    is_utm = reader.read_bool()
    utm_zone = reader.read_int()
    southern = reader.read_int() != 0
    scale_tag = reader.read_bool()
    return GeoCameraRecord(matrix, lvcs, UTMMetadata(is_utm, utm_zone, southern), scale_tag)


__all__ = ["GeoCameraRecord", "write_record", "read_record"]
