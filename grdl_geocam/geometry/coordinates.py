# -*- coding: utf-8 -*-
"""
Coordinate Transformations - ECF, geodetic and East-North-Up frames.

Geodetic <-> ECF conversions on the WGS-84 ellipsoid and the tangent
plane (ENU) rotations used by local vertical coordinate systems.

Attribution
-----------
ECF/geodetic conversions ported from MATLAB SAR Toolbox
(https://github.com/ngageoint/MATLAB_SAR)
Original: Sean Hatch, Wade Schwartzkopf, Rocco Corsetti, NGA

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from typing import Tuple, Optional
import numpy as np

from grdl_geocam.utils.constants import WGS84_A, WGS84_B, WGS84_E2


# ===================================================================
# ECF <-> Geodetic
# ===================================================================

def ecf_to_geodetic(
    x: np.ndarray,
    y: Optional[np.ndarray] = None,
    z: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert ECF (Earth Centered Fixed) coordinates to geodetic.

    Uses the closed-form algorithm from Zhu, J. "Conversion of Earth-centered,
    Earth-fixed coordinates to geodetic coordinates." IEEE Transactions on
    Aerospace and Electronic Systems, 30(3), 1994.

    Parameters
    ----------
    x : np.ndarray
        ECF X coordinate(s) in meters, or a 3-element/Nx3 array of
        full ECF positions.
    y : np.ndarray, optional
        ECF Y coordinate(s) in meters.
    z : np.ndarray, optional
        ECF Z coordinate(s) in meters.

    Returns
    -------
    lat : np.ndarray
        Geodetic latitude in degrees.
    lon : np.ndarray
        Geodetic longitude in degrees.
    alt : np.ndarray
        Altitude above WGS-84 ellipsoid in meters.
    """
    x = np.asarray(x, dtype=np.float64)

    if y is None and z is None:
        if x.ndim == 1 and x.size == 3:
            x, y, z = x[0], x[1], x[2]
        elif x.ndim == 2 and x.shape[1] == 3:
            x, y, z = x[:, 0], x[:, 1], x[:, 2]
        else:
            raise ValueError(f"Invalid ECF shape {x.shape}. Expected (3,) or (N,3)")
    else:
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)

    e2 = WGS84_E2
    a = WGS84_A
    e4 = e2 * e2
    ome2 = 1.0 - e2
    a2 = a * a
    b = WGS84_B
    b2 = b * b
    e_b2 = (a2 - b2) / b2

    z2 = z * z
    r2 = x * x + y * y
    r = np.sqrt(r2)

    # Points too close to the center have no solution
    valid = (a * r) ** 2 + (b * z) ** 2 > (a2 - b2) ** 2

    lon = np.where(valid, np.degrees(np.arctan2(y, x)), np.nan)

    F = 54.0 * b2 * z2
    G = r2 + ome2 * z2 - e2 * (a2 - b2)
    c = e4 * F * r2 / (G * G * G)
    s = (1.0 + c + np.sqrt(c * c + 2.0 * c)) ** (1.0 / 3.0)
    templ = s + 1.0 / s + 1.0
    P = F / (3.0 * templ * templ * G * G)
    Q = np.sqrt(1.0 + 2.0 * e4 * P)
    r0 = (-P * e2 * r / (1.0 + Q) +
          np.sqrt(np.abs(0.5 * a2 * (1.0 + 1.0 / Q) -
                         P * ome2 * z2 / (Q * (1.0 + Q)) -
                         0.5 * P * r2)))
    temp2 = r - e2 * r0
    U = np.sqrt(temp2 * temp2 + z2)
    V = np.sqrt(temp2 * temp2 + ome2 * z2)
    z0 = b2 * z / (a * V)

    lat = np.where(valid, np.degrees(np.arctan2(z + e_b2 * z0, r)), np.nan)
    alt = np.where(valid, U * (1.0 - b2 / (a * V)), np.nan)

    return lat, lon, alt


def geodetic_to_ecf(
    lat: np.ndarray,
    lon: np.ndarray,
    alt: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert geodetic coordinates to ECF (Earth Centered Fixed).

    Parameters
    ----------
    lat : np.ndarray
        Geodetic latitude in degrees.
    lon : np.ndarray
        Geodetic longitude in degrees.
    alt : np.ndarray
        Altitude above WGS-84 ellipsoid in meters.

    Returns
    -------
    x, y, z : np.ndarray
        ECF coordinates in meters.
    """
    lat_rad = np.radians(np.asarray(lat, dtype=np.float64))
    lon_rad = np.radians(np.asarray(lon, dtype=np.float64))
    alt = np.asarray(alt, dtype=np.float64)

    sin_lat = np.sin(lat_rad)
    cos_lat = np.cos(lat_rad)

    R = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)

    x = (R + alt) * cos_lat * np.cos(lon_rad)
    y = (R + alt) * cos_lat * np.sin(lon_rad)
    z = (R + alt - WGS84_E2 * R) * sin_lat

    return x, y, z


# ===================================================================
# ECF <-> ENU (East-North-Up)
# ===================================================================

def ecf_enu_rotation_matrix(lat: float, lon: float) -> np.ndarray:
    """
    Rotation from ECF axes to the East-North-Up axes at a geodetic point.

    Parameters
    ----------
    lat : float
        Geodetic latitude of the tangent point in degrees.
    lon : float
        Longitude of the tangent point in degrees.

    Returns
    -------
    np.ndarray
        3x3 rotation matrix; rows are the E, N and U unit vectors in ECF.
    """
    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)
    sin_lat, cos_lat = np.sin(lat_rad), np.cos(lat_rad)
    sin_lon, cos_lon = np.sin(lon_rad), np.cos(lon_rad)

    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
    ])


def geodetic_to_enu(
    lat: float,
    lon: float,
    alt: float,
    origin: Tuple[float, float, float]
) -> np.ndarray:
    """
    Convert a geodetic point to ENU coordinates about a geodetic origin.

    Parameters
    ----------
    lat, lon : float
        Geodetic latitude and longitude of the point in degrees.
    alt : float
        Height above the ellipsoid in meters.
    origin : tuple of float
        Tangent point as (lat, lon, alt).

    Returns
    -------
    np.ndarray
        (east, north, up) in meters, shape (3,).
    """
    point = np.array(geodetic_to_ecf(lat, lon, alt), dtype=np.float64)
    orp = np.array(geodetic_to_ecf(*origin), dtype=np.float64)
    rot = ecf_enu_rotation_matrix(origin[0], origin[1])
    return rot @ (point - orp)


def enu_to_geodetic(
    east: float,
    north: float,
    up: float,
    origin: Tuple[float, float, float]
) -> Tuple[float, float, float]:
    """
    Convert ENU coordinates about a geodetic origin back to geodetic.

    Parameters
    ----------
    east, north, up : float
        Tangent plane coordinates in meters.
    origin : tuple of float
        Tangent point as (lat, lon, alt).

    Returns
    -------
    lat, lon, alt : float
        Geodetic latitude and longitude in degrees, height in meters.
    """
    orp = np.array(geodetic_to_ecf(*origin), dtype=np.float64)
    rot = ecf_enu_rotation_matrix(origin[0], origin[1])
    ecf = rot.T @ np.array([east, north, up], dtype=np.float64) + orp
    lat, lon, alt = ecf_to_geodetic(ecf)
    return float(lat), float(lon), float(alt)


__all__ = [
    "ecf_to_geodetic",
    "geodetic_to_ecf",
    "ecf_enu_rotation_matrix",
    "geodetic_to_enu",
    "enu_to_geodetic",
]
