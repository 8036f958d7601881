# -*- coding: utf-8 -*-
"""
Utilities - Constants and helper functions.

WGS-84 parameters, EPSG and GeoKey codes, camera format settings and
UTM zone helper functions.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geocam.utils.constants import (
    WGS84_A,
    WGS84_B,
    WGS84_E2,
    PIXEL_SIZE_BASELINE,
    GEO_CAMERA_FORMAT_VERSION,
    LVCS_FORMAT_VERSION,
    utm_zone_for_longitude,
    wgs84_utm_epsg,
)

__all__ = [
    "WGS84_A",
    "WGS84_B",
    "WGS84_E2",
    "PIXEL_SIZE_BASELINE",
    "GEO_CAMERA_FORMAT_VERSION",
    "LVCS_FORMAT_VERSION",
    "utm_zone_for_longitude",
    "wgs84_utm_epsg",
]
