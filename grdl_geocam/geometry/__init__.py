# -*- coding: utf-8 -*-
"""
Geodetic Geometry - Coordinate conversions and local frames.

Provides:
- ECF / geodetic / East-North-Up conversions on the WGS-84 ellipsoid
- WGS-84 <-> UTM projection
- Local vertical coordinate systems anchored at a geodetic origin

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geocam.geometry.coordinates import (
    ecf_to_geodetic,
    geodetic_to_ecf,
    ecf_enu_rotation_matrix,
    geodetic_to_enu,
    enu_to_geodetic,
)

from grdl_geocam.geometry.utm import UTMConverter

from grdl_geocam.geometry.lvcs import (
    ContextKind,
    GlobalFrame,
    LocalVerticalCS,
    write_lvcs,
    read_lvcs,
)

__all__ = [
    # Coordinates
    "ecf_to_geodetic",
    "geodetic_to_ecf",
    "ecf_enu_rotation_matrix",
    "geodetic_to_enu",
    "enu_to_geodetic",
    # UTM
    "UTMConverter",
    # Local frames
    "ContextKind",
    "GlobalFrame",
    "LocalVerticalCS",
    "write_lvcs",
    "read_lvcs",
]
