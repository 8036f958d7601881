# -*- coding: utf-8 -*-
"""
Geo Camera - Pixel <-> geographic camera model and its construction.

Provides:
- Affine pixel <-> native transform with a diagonal fast path
- Effective frame dispatch between local and global coordinates
- Construction adapters for GeoTIFF headers, GDAL geotransforms,
  tile file names and world files
- The GeoCamera aggregate and its versioned binary record

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geocam.camera.transform import AffineGeoTransform
from grdl_geocam.camera.frames import Frame, resolve_frame
from grdl_geocam.camera.adapters import (
    UTMMetadata,
    CanonicalTransform,
    TileName,
    tiepoint_transform,
    from_geotiff_header,
    from_geotransform,
    parse_tile_filename,
    from_tile_filename,
    from_world_file,
)
from grdl_geocam.camera.serialization import (
    GeoCameraRecord,
    write_record,
    read_record,
)
from grdl_geocam.camera.geo_camera import GeoCamera

__all__ = [
    # Transform
    "AffineGeoTransform",
    # Frames
    "Frame",
    "resolve_frame",
    # Adapters
    "UTMMetadata",
    "CanonicalTransform",
    "TileName",
    "tiepoint_transform",
    "from_geotiff_header",
    "from_geotransform",
    "parse_tile_filename",
    "from_tile_filename",
    "from_world_file",
    # Serialization
    "GeoCameraRecord",
    "write_record",
    "read_record",
    # Camera
    "GeoCamera",
]
