# -*- coding: utf-8 -*-
"""
grdl-geocam - Geodetic camera model for georeferenced rasters.

Maps image pixel coordinates to and from WGS-84 longitude/latitude or
UTM easting/northing, and those global coordinates to and from a local
tangent-plane frame. Cameras are built from GeoTIFF headers, GDAL
geotransforms, tile file names or world files.

Modules
-------
camera : Affine transform, construction adapters and the GeoCamera model
geometry : Geodetic conversions, UTM projection and local frames
io : Binary primitives, world files and GeoTIFF header metadata
utils : Constants and helper functions

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

__version__ = "0.1.0"

from grdl_geocam import camera, geometry, io, utils
from grdl_geocam.camera import GeoCamera
from grdl_geocam.exceptions import (
    GeoCameraError,
    ConfigurationError,
    FormatError,
    UnsupportedVersionError,
)
from grdl_geocam.geometry import ContextKind, LocalVerticalCS

__all__ = [
    "camera",
    "geometry",
    "io",
    "utils",
    "GeoCamera",
    "LocalVerticalCS",
    "ContextKind",
    "GeoCameraError",
    "ConfigurationError",
    "FormatError",
    "UnsupportedVersionError",
    "__version__",
]
