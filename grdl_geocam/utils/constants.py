# -*- coding: utf-8 -*-
"""
Geodetic Constants - Ellipsoid, EPSG and format constants for geo cameras.

Provides commonly used constants including:
- WGS-84 ellipsoid parameters
- EPSG code bases for the supported UTM projections
- GeoTIFF GeoKey identifiers and codes
- Numeric and file-format settings used by the camera model

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import math

# ===================================================================
# WGS-84 Ellipsoid Parameters
# ===================================================================

#: WGS-84 semi-major axis (equatorial radius) in meters
WGS84_A = 6378137.0  # m

#: WGS-84 semi-minor axis (polar radius) in meters
WGS84_B = 6356752.314245  # m

#: WGS-84 first eccentricity squared (e² = (a²-b²)/a²)
WGS84_E2 = (WGS84_A**2 - WGS84_B**2) / WGS84_A**2  # ~0.00669437999014

# ===================================================================
# EPSG Codes
# ===================================================================

#: Geographic WGS-84 (lat/lon degrees)
EPSG_WGS84 = 4326

#: WGS-84 / UTM northern hemisphere, zone added (32601..32660)
EPSG_WGS84_UTM_NORTH_BASE = 32600

#: WGS-84 / UTM southern hemisphere, zone added (32701..32760)
EPSG_WGS84_UTM_SOUTH_BASE = 32700

#: NAD83 / UTM northern hemisphere, zone added (26901..26923)
EPSG_NAD83_UTM_NORTH_BASE = 26900

#: Highest zone defined for NAD83 / UTM
NAD83_UTM_MAX_ZONE = 23

#: Number of UTM zones
UTM_NUM_ZONES = 60

# ===================================================================
# GeoTIFF GeoKeys
# ===================================================================

#: TIFF tag ids carrying georeferencing
TIFF_TAG_MODEL_PIXEL_SCALE = 33550
TIFF_TAG_MODEL_TIEPOINT = 33922
TIFF_TAG_MODEL_TRANSFORMATION = 34264
TIFF_TAG_GEO_KEY_DIRECTORY = 34735

#: GeoKey ids
GT_MODEL_TYPE_GEO_KEY = 1024
GEOGRAPHIC_TYPE_GEO_KEY = 2048
GEOG_LINEAR_UNITS_GEO_KEY = 2052
GEOG_ANGULAR_UNITS_GEO_KEY = 2054
PROJECTED_CS_TYPE_GEO_KEY = 3072
PROJ_LINEAR_UNITS_GEO_KEY = 3076

#: GTModelTypeGeoKey values
MODEL_TYPE_PROJECTED = 1
MODEL_TYPE_GEOGRAPHIC = 2

#: Unit codes
LINEAR_UNIT_METER = 9001
ANGULAR_UNIT_DEGREE = 9102

# ===================================================================
# Camera Model Settings
# ===================================================================

#: Pixel offset used by the finite-difference pixel spacing estimate
PIXEL_SIZE_BASELINE = 100000.0

#: Binary record version written by the geo camera serializer
GEO_CAMERA_FORMAT_VERSION = 1

#: Binary record version written by the local vertical coordinate system
LVCS_FORMAT_VERSION = 1

#: Significant digits written to world files
WORLD_FILE_PRECISION = 12

# ===================================================================
# Helper Functions
# ===================================================================

def utm_zone_for_longitude(lon: float) -> int:
    """
    Compute the standard UTM zone number for a longitude.

    Parameters
    ----------
    lon : float
        Longitude in degrees.

    Returns
    -------
    int
        Zone number in [1, 60].

    Examples
    --------
    >>> utm_zone_for_longitude(-77.0)
    18
    """
    zone = int(math.floor((lon + 180.0) / 6.0)) % UTM_NUM_ZONES + 1
    return zone


def wgs84_utm_epsg(zone: int, southern: bool = False) -> int:
    """
    EPSG code of a WGS-84 / UTM zone.

    Parameters
    ----------
    zone : int
        UTM zone number in [1, 60].
    southern : bool
        True for the southern hemisphere (false northing 10,000 km).

    Returns
    -------
    int
        EPSG code, e.g. 32618 for zone 18 north.

    Raises
    ------
    ValueError
        If the zone is outside [1, 60].
    """
    if not 1 <= zone <= UTM_NUM_ZONES:
        raise ValueError(f"UTM zone must be in [1, {UTM_NUM_ZONES}], got {zone}")
    base = EPSG_WGS84_UTM_SOUTH_BASE if southern else EPSG_WGS84_UTM_NORTH_BASE
    return base + zone



# ===================================================================
# Constants Dictionary (for programmatic access)
# ===================================================================

CONSTANTS = {
    'WGS84_A': WGS84_A,
    'WGS84_B': WGS84_B,
    'WGS84_E2': WGS84_E2,
    'EPSG_WGS84': EPSG_WGS84,
    'PIXEL_SIZE_BASELINE': PIXEL_SIZE_BASELINE,
    'GEO_CAMERA_FORMAT_VERSION': GEO_CAMERA_FORMAT_VERSION,
    'LVCS_FORMAT_VERSION': LVCS_FORMAT_VERSION,
    'WORLD_FILE_PRECISION': WORLD_FILE_PRECISION,
}

__all__ = [
    # WGS-84 parameters
    'WGS84_A',
    'WGS84_B',
    'WGS84_E2',
    # EPSG
    'EPSG_WGS84',
    'EPSG_WGS84_UTM_NORTH_BASE',
    'EPSG_WGS84_UTM_SOUTH_BASE',
    'EPSG_NAD83_UTM_NORTH_BASE',
    'NAD83_UTM_MAX_ZONE',
    'UTM_NUM_ZONES',
    # GeoTIFF
    'TIFF_TAG_MODEL_PIXEL_SCALE',
    'TIFF_TAG_MODEL_TIEPOINT',
    'TIFF_TAG_MODEL_TRANSFORMATION',
    'TIFF_TAG_GEO_KEY_DIRECTORY',
    'GT_MODEL_TYPE_GEO_KEY',
    'GEOGRAPHIC_TYPE_GEO_KEY',
    'GEOG_LINEAR_UNITS_GEO_KEY',
    'GEOG_ANGULAR_UNITS_GEO_KEY',
    'PROJECTED_CS_TYPE_GEO_KEY',
    'PROJ_LINEAR_UNITS_GEO_KEY',
    'MODEL_TYPE_PROJECTED',
    'MODEL_TYPE_GEOGRAPHIC',
    'LINEAR_UNIT_METER',
    'ANGULAR_UNIT_DEGREE',
    # Camera model
    'PIXEL_SIZE_BASELINE',
    'GEO_CAMERA_FORMAT_VERSION',
    'LVCS_FORMAT_VERSION',
    'WORLD_FILE_PRECISION',
    # Helper functions
    'utm_zone_for_longitude',
    'wgs84_utm_epsg',
    # Dictionary
    'CONSTANTS',
]
