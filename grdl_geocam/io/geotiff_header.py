# -*- coding: utf-8 -*-
"""
GeoTIFF Header - Georeferencing metadata from decoded GeoTIFF tags.

``GeoKeyHeader`` interprets the GeoTIFF georeferencing tags of an image
whose TIFF directory has already been decoded (by any TIFF library):

- ModelPixelScaleTag (33550)
- ModelTiepointTag (33922)
- ModelTransformationTag (34264)
- GeoKeyDirectoryTag (34735), with GeoDoubleParams (34736) and
  GeoAsciiParams (34737)

It implements the ``GeoTiffHeaderSource`` protocol consumed by the
header construction adapter.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from grdl_geocam.exceptions import FormatError
from grdl_geocam.utils.constants import (
    ANGULAR_UNIT_DEGREE,
    EPSG_NAD83_UTM_NORTH_BASE,
    EPSG_WGS84,
    EPSG_WGS84_UTM_NORTH_BASE,
    EPSG_WGS84_UTM_SOUTH_BASE,
    GEOG_ANGULAR_UNITS_GEO_KEY,
    GEOG_LINEAR_UNITS_GEO_KEY,
    GEOGRAPHIC_TYPE_GEO_KEY,
    GT_MODEL_TYPE_GEO_KEY,
    LINEAR_UNIT_METER,
    MODEL_TYPE_GEOGRAPHIC,
    MODEL_TYPE_PROJECTED,
    NAD83_UTM_MAX_ZONE,
    PROJ_LINEAR_UNITS_GEO_KEY,
    PROJECTED_CS_TYPE_GEO_KEY,
    TIFF_TAG_GEO_KEY_DIRECTORY,
    TIFF_TAG_MODEL_PIXEL_SCALE,
    TIFF_TAG_MODEL_TIEPOINT,
    TIFF_TAG_MODEL_TRANSFORMATION,
    UTM_NUM_ZONES,
)

TIFF_TAG_GEO_DOUBLE_PARAMS = 34736
TIFF_TAG_GEO_ASCII_PARAMS = 34737


class GeoTiffHeaderSource(Protocol):
    """Georeferencing metadata consumed by the header adapter."""

    def has_explicit_transform(self) -> bool: ...

    def model_transformation(self) -> Optional[Sequence[float]]: ...

    def tie_points(self) -> List[Tuple[float, ...]]: ...

    def pixel_scale(self) -> Optional[Tuple[float, float, float]]: ...

    def is_geographic_wgs84_deg_m(self) -> bool: ...

    def utm_wgs84_zone(self) -> Optional[Tuple[int, bool]]: ...

    def utm_nad83_zone(self) -> Optional[Tuple[int, bool]]: ...


def parse_geo_key_directory(
    directory: Sequence[int],
    double_params: Optional[Sequence[float]] = None,
    ascii_params: Optional[str] = None
) -> Dict[int, Any]:
    """
    Decode a GeoKeyDirectoryTag into a key -> value mapping.

    Parameters
    ----------
    directory : sequence of int
        Raw GeoKeyDirectoryTag values: a 4-short header followed by
        (KeyID, TIFFTagLocation, Count, ValueOffset) entries.
    double_params : sequence of float, optional
        GeoDoubleParamsTag values.
    ascii_params : str, optional
        GeoAsciiParamsTag value.

    Returns
    -------
    dict
        GeoKey id to int, float, tuple of float, or str.

    Raises
    ------
    FormatError
        If the directory is truncated or references missing params.
    """
    directory = [int(v) for v in directory]
    if len(directory) < 4:
        raise FormatError("GeoKeyDirectory is shorter than its header")
    num_keys = directory[3]
    if len(directory) < 4 + 4 * num_keys:
        raise FormatError(
            f"GeoKeyDirectory declares {num_keys} keys but holds "
            f"{(len(directory) - 4) // 4}"
        )

    keys = {}
    for n in range(num_keys):
        key_id, location, count, offset = directory[4 + 4 * n: 8 + 4 * n]
        if location == 0:
            keys[key_id] = offset
        elif location == TIFF_TAG_GEO_DOUBLE_PARAMS:
            if double_params is None or offset + count > len(double_params):
                raise FormatError(f"GeoKey {key_id} references missing double params")
            values = tuple(float(v) for v in double_params[offset:offset + count])
            keys[key_id] = values[0] if count == 1 else values
        elif location == TIFF_TAG_GEO_ASCII_PARAMS:
            if ascii_params is None or offset + count > len(ascii_params):
                raise FormatError(f"GeoKey {key_id} references missing ascii params")
            keys[key_id] = ascii_params[offset:offset + count].rstrip('|\x00')
        else:
            raise FormatError(f"GeoKey {key_id} stored in unsupported tag {location}")
    return keys


@dataclass
class GeoKeyHeader:
    """
    GeoTIFF georeferencing header.

    Attributes
    ----------
    model_pixel_scale : sequence of float, optional
        (sx, sy[, sz]) from ModelPixelScaleTag.
    model_tiepoints : sequence of float
        Flat (I, J, K, X, Y, Z) * n values from ModelTiepointTag.
    model_transformation_values : sequence of float, optional
        16 row-major values from ModelTransformationTag.
    geo_keys : dict
        Decoded GeoKeys by numeric id.
    """
    model_pixel_scale: Optional[Sequence[float]] = None
    model_tiepoints: Sequence[float] = field(default_factory=list)
    model_transformation_values: Optional[Sequence[float]] = None
    geo_keys: Dict[int, Any] = field(default_factory=dict)

    @classmethod
    def from_tiff_tags(cls, tags: Mapping[int, Any]) -> 'GeoKeyHeader':
        """
        Build a header from a TIFF tag id -> value mapping.

        Parameters
        ----------
        tags : mapping
            Decoded TIFF tags keyed by numeric tag id.

        Raises
        ------
        FormatError
            If the GeoKey directory is malformed.
        """
        directory = tags.get(TIFF_TAG_GEO_KEY_DIRECTORY)
        tiepoints = tags.get(TIFF_TAG_MODEL_TIEPOINT)
        geo_keys = {}
        if directory is not None:
            geo_keys = parse_geo_key_directory(
                directory,
                tags.get(TIFF_TAG_GEO_DOUBLE_PARAMS),
                tags.get(TIFF_TAG_GEO_ASCII_PARAMS),
            )
        return cls(
            model_pixel_scale=tags.get(TIFF_TAG_MODEL_PIXEL_SCALE),
            model_tiepoints=[] if tiepoints is None else list(tiepoints),
            model_transformation_values=tags.get(TIFF_TAG_MODEL_TRANSFORMATION),
            geo_keys=geo_keys,
        )

    # ------------------------------------------------------------------
    # Transform sources
    # ------------------------------------------------------------------

    def has_explicit_transform(self) -> bool:
        return self.model_transformation_values is not None

    def model_transformation(self) -> Optional[Sequence[float]]:
        if self.model_transformation_values is None:
            return None
        return [float(v) for v in self.model_transformation_values]

    def tie_points(self) -> List[Tuple[float, ...]]:
        """Tie points grouped into (I, J, K, X, Y, Z) tuples."""
        values = [float(v) for v in self.model_tiepoints]
        return [tuple(values[n:n + 6]) for n in range(0, len(values), 6)]

    def pixel_scale(self) -> Optional[Tuple[float, float, float]]:
        if self.model_pixel_scale is None:
            return None
        scale = [float(v) for v in self.model_pixel_scale]
        if len(scale) < 2:
            return None
        if len(scale) == 2:
            scale.append(0.0)
        return scale[0], scale[1], scale[2]

    # ------------------------------------------------------------------
    # Model / unit predicates
    # ------------------------------------------------------------------

    def _model_type(self) -> Optional[int]:
        return self.geo_keys.get(GT_MODEL_TYPE_GEO_KEY)

    def is_geographic_wgs84_deg_m(self) -> bool:
        """Geographic WGS-84 with degree angular and meter linear units."""
        if self._model_type() != MODEL_TYPE_GEOGRAPHIC:
            return False
        if self.geo_keys.get(GEOGRAPHIC_TYPE_GEO_KEY) != EPSG_WGS84:
            return False
        angular = self.geo_keys.get(GEOG_ANGULAR_UNITS_GEO_KEY, ANGULAR_UNIT_DEGREE)
        linear = self.geo_keys.get(GEOG_LINEAR_UNITS_GEO_KEY, LINEAR_UNIT_METER)
        return angular == ANGULAR_UNIT_DEGREE and linear == LINEAR_UNIT_METER

    def _projected_cs(self) -> Optional[int]:
        if self._model_type() != MODEL_TYPE_PROJECTED:
            return None
        linear = self.geo_keys.get(PROJ_LINEAR_UNITS_GEO_KEY, LINEAR_UNIT_METER)
        if linear != LINEAR_UNIT_METER:
            return None
        return self.geo_keys.get(PROJECTED_CS_TYPE_GEO_KEY)

    def utm_wgs84_zone(self) -> Optional[Tuple[int, bool]]:
        """(zone, southern) for a WGS-84 / UTM projection, else None."""
        pcs = self._projected_cs()
        if pcs is None:
            return None
        if EPSG_WGS84_UTM_NORTH_BASE < pcs <= EPSG_WGS84_UTM_NORTH_BASE + UTM_NUM_ZONES:
            return pcs - EPSG_WGS84_UTM_NORTH_BASE, False
        if EPSG_WGS84_UTM_SOUTH_BASE < pcs <= EPSG_WGS84_UTM_SOUTH_BASE + UTM_NUM_ZONES:
            return pcs - EPSG_WGS84_UTM_SOUTH_BASE, True
        return None

    def utm_nad83_zone(self) -> Optional[Tuple[int, bool]]:
        """(zone, southern) for a NAD83 / UTM projection, else None."""
        pcs = self._projected_cs()
        if pcs is None:
            return None
        if EPSG_NAD83_UTM_NORTH_BASE < pcs <= EPSG_NAD83_UTM_NORTH_BASE + NAD83_UTM_MAX_ZONE:
            return pcs - EPSG_NAD83_UTM_NORTH_BASE, False
        return None


__all__ = [
    "GeoTiffHeaderSource",
    "GeoKeyHeader",
    "parse_geo_key_directory",
]
