# -*- coding: utf-8 -*-
"""
Geo Camera I/O - Binary primitives and georeferencing file formats.

Provides little-endian binary readers and writers for the camera
record, world file reading and writing, and a GeoTIFF georeferencing
header built from decoded tag values.

Note: decoding TIFF files themselves is left to a TIFF library.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geocam.io.binary import BinaryReader, BinaryWriter
from grdl_geocam.io.world_file import read_world_file, write_world_file
from grdl_geocam.io.geotiff_header import (
    GeoTiffHeaderSource,
    GeoKeyHeader,
    parse_geo_key_directory,
)

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "read_world_file",
    "write_world_file",
    "GeoTiffHeaderSource",
    "GeoKeyHeader",
    "parse_geo_key_directory",
]
