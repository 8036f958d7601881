# -*- coding: utf-8 -*-
"""
Construction Adapters - Normalize georeferencing sources to one transform.

Each adapter is a pure function from one kind of metadata source to a
``CanonicalTransform`` (affine transform plus UTM metadata):

- ``from_geotiff_header``: GeoTIFF model transformation, or pixel scale
  plus tie points, with the model/unit combination validated.
- ``from_geotransform``: GDAL six-coefficient geotransform.
- ``from_tile_filename``: tile extents encoded in a file name, e.g.
  ``dem_N35W73_S0.6x0.6_v2.tif``.
- ``from_world_file``: six-coefficient world file.

Adapters raise ``ConfigurationError`` or ``FormatError``; they never
return partially built results.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import logging
import math
import os
import re
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from grdl_geocam.camera.transform import AffineGeoTransform
from grdl_geocam.exceptions import ConfigurationError, FormatError
from grdl_geocam.io.geotiff_header import GeoTiffHeaderSource
from grdl_geocam.io.world_file import read_world_file

log = logging.getLogger(__name__)


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class UTMMetadata:
    """
    UTM addressing of a camera's native coordinates.

    Attributes
    ----------
    is_utm : bool
        Native coordinates are UTM easting/northing rather than lon/lat.
    utm_zone : int
        UTM zone, meaningful only when ``is_utm``.
    southern : bool
        Southern hemisphere (northings carry the 10,000 km false northing).
    """
    is_utm: bool = False
    utm_zone: int = 0
    southern: bool = False

    @classmethod
    def from_zone(cls, utm_zone: int, southern: bool = False) -> 'UTMMetadata':
        """UTM metadata for a caller-supplied zone; zone <= 0 means not UTM."""
        utm_zone = int(utm_zone)
        return cls(is_utm=utm_zone > 0, utm_zone=utm_zone, southern=bool(southern))


@dataclass
class CanonicalTransform:
    """Adapter result: an affine transform and its UTM metadata."""
    transform: AffineGeoTransform
    utm: UTMMetadata = field(default_factory=UTMMetadata)


class TileName(NamedTuple):
    """
    Tile extent token parsed from a file name.

    Latitude and longitude are the unsigned values written in the name;
    ``hemisphere`` and ``direction`` give their signs.
    """
    hemisphere: str
    direction: str
    lat: float
    lon: float
    scale_lat: float
    scale_lon: float

    def upper_left_corner(self) -> Tuple[float, float]:
        """Upper-left corner as hemisphere-relative (lat, lon)."""
        if self.hemisphere == 'N':
            return self.lat + self.scale_lat, self.lon
        return self.lat - self.scale_lat, self.lon

    def lower_right_corner(self) -> Tuple[float, float]:
        """Lower-right corner as hemisphere-relative (lat, lon)."""
        if self.direction == 'W':
            return self.lat, self.lon - self.scale_lon
        return self.lat, self.lon + self.scale_lon

    def label(self, corner: Tuple[float, float]) -> str:
        """Format a hemisphere-relative corner, e.g. ``N35.6W73``."""
        return f"{self.hemisphere}{corner[0]:g}{self.direction}{corner[1]:g}"


# ===================================================================
# GeoTIFF header
# ===================================================================

def tiepoint_transform(
    pixel_scale: Sequence[float],
    tie_points: Sequence[Sequence[float]]
) -> np.ndarray:
    """
    Build a transform matrix from a pixel scale and the first tie point.

    The matrix is::

        | Sx   0    0   Tx |      Tx = X - I*Sx
        | 0   -Sy   0   Ty |      Ty = Y + J*Sy
        | 0    0    Sz  Tz |      Tz = Z - K*Sz
        | 0    0    0   1  |

    Y is negated because image rows grow downward while northing and
    latitude grow upward.

    Parameters
    ----------
    pixel_scale : sequence of float
        (Sx, Sy, Sz).
    tie_points : sequence of sequence of float
        (I, J, K, X, Y, Z) tie points; only the first is used.

    Returns
    -------
    np.ndarray
        4x4 transform matrix.

    Raises
    ------
    ConfigurationError
        If there is no tie point or the first is not a 6-tuple.
    """
    if len(tie_points) == 0:
        raise ConfigurationError("Pixel scale given without any tie point")
    tie = tie_points[0]
    if len(tie) != 6:
        raise ConfigurationError(
            f"Tie points must hold (I, J, K, X, Y, Z), got {len(tie)} values"
        )
    I, J, K, X, Y, Z = (float(v) for v in tie)
    sx, sy, sz = (float(v) for v in pixel_scale)

    m = np.zeros((4, 4))
    m[0, 0] = sx
    m[1, 1] = -sy
    m[2, 2] = sz
    m[3, 3] = 1.0
    m[0, 3] = X - I * sx
    m[1, 3] = Y + J * sy
    m[2, 3] = Z - K * sz
    return m


def from_geotiff_header(header: GeoTiffHeaderSource) -> CanonicalTransform:
    """
    Canonical transform from GeoTIFF georeferencing metadata.

    An explicit model transformation takes precedence (general path);
    otherwise the pixel scale and first tie point define a diagonal
    transform (``scale_tag`` set).

    Parameters
    ----------
    header : GeoTiffHeaderSource
        Header metadata.

    Returns
    -------
    CanonicalTransform

    Raises
    ------
    ConfigurationError
        If no transform can be formed, the matrix is not 4x4, or the
        model is not geographic WGS-84 degrees/meters, WGS-84 / UTM or
        NAD83 / UTM.
    """
    if header.has_explicit_transform():
        values = np.asarray(header.model_transformation(), dtype=np.float64)
        if values.size != 16:
            raise ConfigurationError(
                f"Model transformation requires 16 values, got {values.size}"
            )
        log.info("Model transformation given, using it")
        transform = AffineGeoTransform(values.reshape(4, 4), scale_tag=False)
    else:
        scale = header.pixel_scale()
        if scale is None:
            raise ConfigurationError(
                "Transform matrix cannot be formed: no model transformation "
                "and no pixel scale"
            )
        transform = AffineGeoTransform(
            tiepoint_transform(scale, header.tie_points()), scale_tag=True
        )

    if header.is_geographic_wgs84_deg_m():
        return CanonicalTransform(transform, UTMMetadata())

    zone = header.utm_wgs84_zone() or header.utm_nad83_zone()
    if zone is None:
        raise ConfigurationError(
            "Unsupported model: UTM is supported only as WGS84 / UTM or "
            "NAD83 / UTM, geographic only as WGS84 with angular units in "
            "degrees and linear units in meters"
        )
    utm_zone, southern = zone
    return CanonicalTransform(transform, UTMMetadata(True, int(utm_zone), bool(southern)))


# ===================================================================
# GDAL geotransform
# ===================================================================

def from_geotransform(
    geotransform: Sequence[float],
    utm_zone: int = 0,
    southern: bool = False
) -> CanonicalTransform:
    """
    Canonical transform from a GDAL geotransform.

    GeoTransform coordinates assume "PixelIsArea": (0.0, 0.0) is the top
    left corner of the top left pixel.

    Parameters
    ----------
    geotransform : sequence of float
        (ox, px_w, row_rot, oy, col_rot, px_h).
    utm_zone : int
        UTM zone of the native coordinates; 0 for WGS-84 lon/lat.
    southern : bool
        Southern hemisphere flag, passed through unchanged.

    Raises
    ------
    ConfigurationError
        If ``geotransform`` does not hold six values.
    """
    transform = AffineGeoTransform.from_geotransform(geotransform)
    return CanonicalTransform(transform, UTMMetadata.from_zone(utm_zone, southern))


# ===================================================================
# File name encoded tiles
# ===================================================================

_SCALE_PATTERN = re.compile(r'^S(\d+(?:\.\d+)?)(?:x(\d+(?:\.\d+)?))?')


def _parse_float(text: str, what: str, name: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise FormatError(f"Cannot parse {what} from '{text}' in {name}") from None


def parse_tile_filename(filename: str) -> TileName:
    """
    Parse the tile token of a file name.

    The base name is split on ``_``; the second field carries
    ``<N|S><lat><E|W><lon>`` and the third ``S<scale_lat>[x<scale_lon>]``.

    Parameters
    ----------
    filename : str
        Path or base name, e.g. ``dem_N35W73_S0.6x0.6_v2.tif``.

    Returns
    -------
    TileName

    Raises
    ------
    FormatError
        If any field or marker is missing or non-numeric.
    """
    name = os.path.basename(filename)
    parts = name.split('_')
    if len(parts) < 3:
        raise FormatError(
            f"File name {name} lacks '_<coords>_S<scale>' tile fields"
        )
    coords, scale = parts[1], parts[2]

    hemi = re.search(r'[NS]', coords)
    direc = re.search(r'[EW]', coords)
    if hemi is None or direc is None or direc.start() < hemi.start():
        raise FormatError(
            f"Tile coordinates '{coords}' in {name} need <N|S><lat><E|W><lon>"
        )
    lat = _parse_float(coords[hemi.end():direc.start()], 'latitude', name)
    lon = _parse_float(coords[direc.end():], 'longitude', name)

    match = _SCALE_PATTERN.match(scale)
    if match is None:
        raise FormatError(f"Tile scale '{scale}' in {name} needs S<lat>[x<lon>]")
    scale_lat = float(match.group(1))
    scale_lon = float(match.group(2)) if match.group(2) else scale_lat

    tile = TileName(hemi.group(), direc.group(), lat, lon, scale_lat, scale_lon)
    log.debug("Tile %s: hemisphere %s direction %s lat %g lon %g scale %gx%g",
              name, tile.hemisphere, tile.direction, lat, lon, scale_lat, scale_lon)
    return tile


def from_tile_filename(
    filename: str,
    ni: int,
    nj: int,
    global_coords: bool = False
) -> CanonicalTransform:
    """
    Canonical transform from a tile file name and the image size.

    Pixel (0, 0) sits at the upper-left corner and pixel (ni-1, nj-1) at
    the lower-right one: adjacent tiles share a one-pixel overlap, so
    the pixel step is ``scale / (n - 1)``. The origin is then moved half
    a pixel inward by ``0.5 / (n - 1)``.

    Parameters
    ----------
    filename : str
        Tile file name, see ``parse_tile_filename``.
    ni, nj : int
        Image width and height in pixels, at least 2.
    global_coords : bool
        False keeps hemisphere-relative magnitudes (west longitudes grow
        leftward, southern latitudes grow downward). True produces signed
        WGS-84 lon/lat with south and west negative.

    Returns
    -------
    CanonicalTransform
        WGS-84 (not UTM) transform with ``scale_tag`` set.

    Raises
    ------
    FormatError
        If the file name cannot be parsed or the image is too small.
    """
    if ni < 2 or nj < 2:
        raise FormatError(f"Tile image must be at least 2x2 pixels, got {ni}x{nj}")
    tile = parse_tile_filename(filename)
    log.info("Upper left corner in the image is %s, lower right corner is %s",
             tile.label(tile.upper_left_corner()),
             tile.label(tile.lower_right_corner()))

    di = 1.0 / (ni - 1.0)
    dj = 1.0 / (nj - 1.0)
    if global_coords:
        lat = -tile.lat if tile.hemisphere == 'S' else tile.lat
        lon = -tile.lon if tile.direction == 'W' else tile.lon
        step_x = tile.scale_lon * di
        step_y = -tile.scale_lat * dj
        top = lat + tile.scale_lat
    else:
        lon = tile.lon
        step_x = (-tile.scale_lon if tile.direction == 'W' else tile.scale_lon) * di
        if tile.hemisphere == 'N':
            step_y = -tile.scale_lat * dj
            top = tile.lat + tile.scale_lat
        else:
            step_y = tile.scale_lat * dj
            top = tile.lat - tile.scale_lat

    m = np.eye(4)
    m[0, 0] = step_x
    m[1, 1] = step_y
    m[0, 3] = lon + math.copysign(0.5 * di, step_x)
    m[1, 3] = top + math.copysign(0.5 * dj, step_y)
    return CanonicalTransform(AffineGeoTransform(m, scale_tag=True), UTMMetadata())


# ===================================================================
# World file
# ===================================================================

def from_world_file(
    filename: str,
    utm_zone: int = 0,
    southern: bool = False
) -> CanonicalTransform:
    """
    Canonical transform from a world file.

    Parameters
    ----------
    filename : str
        Path to the world file.
    utm_zone : int
        UTM zone of the native coordinates; 0 for WGS-84 lon/lat.
    southern : bool
        Southern hemisphere flag.

    Raises
    ------
    FormatError
        If the file cannot be opened or is corrupt.
    """
    coefficients = read_world_file(filename)
    transform = AffineGeoTransform.from_world_file_coefficients(coefficients)
    return CanonicalTransform(transform, UTMMetadata.from_zone(utm_zone, southern))


__all__ = [
    "UTMMetadata",
    "CanonicalTransform",
    "TileName",
    "tiepoint_transform",
    "from_geotiff_header",
    "from_geotransform",
    "parse_tile_filename",
    "from_tile_filename",
    "from_world_file",
]
