# -*- coding: utf-8 -*-
"""
UTM Conversion - WGS-84 latitude/longitude to and from UTM easting/northing.

The projection itself is delegated to pyproj using the WGS-84 / UTM
EPSG definitions (326zz north, 327zz south). Transformers are cached
per zone and hemisphere.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from functools import lru_cache
from typing import Optional, Tuple
import math

from pyproj import CRS, Transformer

from grdl_geocam.utils.constants import (
    EPSG_WGS84,
    utm_zone_for_longitude,
    wgs84_utm_epsg,
)


@lru_cache(maxsize=128)
def _utm_transformer(zone: int, southern: bool, inverse: bool) -> Transformer:
    """Cached always_xy transformer between lon/lat and one UTM zone."""
    geographic = CRS(EPSG_WGS84)
    projected = CRS(wgs84_utm_epsg(zone, southern))
    if inverse:
        return Transformer.from_crs(projected, geographic, always_xy=True)
    return Transformer.from_crs(geographic, projected, always_xy=True)


class UTMConverter:
    """
    Convert between WGS-84 geodetic coordinates and UTM.

    Elevation is passed through unchanged; UTM is a horizontal projection.

    Examples
    --------
    >>> utm = UTMConverter()
    >>> e, n, zone = utm.to_utm(38.8977, -77.0365)
    >>> lat, lon, _ = utm.to_latlon(zone, e, n)
    """

    def to_utm(
        self,
        lat: float,
        lon: float,
        elevation: float = 0.0,
        zone: Optional[int] = None,
        southern: Optional[bool] = None
    ) -> Tuple[float, float, int]:
        """
        Project a geodetic point to UTM.

        Parameters
        ----------
        lat : float
            Latitude in degrees.
        lon : float
            Longitude in degrees.
        elevation : float
            Height in meters (unused by the projection).
        zone : int, optional
            Force a zone. Default is the standard zone of ``lon``.
        southern : bool, optional
            Force the hemisphere. Default is ``lat < 0``.

        Returns
        -------
        easting : float
            Easting in meters.
        northing : float
            Northing in meters (false northing applied when southern).
        zone : int
            Zone used for the projection.

        Raises
        ------
        ValueError
            If the projection produces non-finite values.
        """
        if zone is None:
            zone = utm_zone_for_longitude(lon)
        if southern is None:
            southern = lat < 0.0
        transformer = _utm_transformer(int(zone), bool(southern), False)
        easting, northing = transformer.transform(lon, lat)
        if math.isinf(easting) or math.isinf(northing):
            raise ValueError(
                f"Unable to project ({lat}, {lon}) to UTM zone {zone}"
            )
        return float(easting), float(northing), int(zone)

    def to_latlon(
        self,
        zone: int,
        easting: float,
        northing: float,
        elevation: float = 0.0,
        southern: bool = False
    ) -> Tuple[float, float, float]:
        """
        Invert a UTM coordinate to geodetic latitude/longitude.

        Parameters
        ----------
        zone : int
            UTM zone number in [1, 60].
        easting : float
            Easting in meters.
        northing : float
            Northing in meters.
        elevation : float
            Height in meters, returned unchanged.
        southern : bool
            True if ``northing`` carries the southern false northing.

        Returns
        -------
        lat, lon, elevation : float
            Latitude and longitude in degrees, height in meters.
        """
        transformer = _utm_transformer(int(zone), bool(southern), True)
        lon, lat = transformer.transform(easting, northing)
        return float(lat), float(lon), float(elevation)


__all__ = ["UTMConverter"]
