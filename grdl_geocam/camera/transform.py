# -*- coding: utf-8 -*-
"""
Affine Geo Transform - Pixel to native geographic coordinate mapping.

A 4x4 homogeneous matrix relates pixel coordinates (i, j, k) to native
coordinates (x, y, z), where native is either (lon, lat, elev) in WGS-84
degrees or (easting, northing, elev) in UTM meters::

    | x |   | T00  T01  T02  T03 |   | i |
    | y | = | T10  T11  T12  T13 | * | j |
    | z |   | T20  T21  T22  T23 |   | k |
    | 1 |   | 0    0    0    1   |   | 1 |

With ``scale_tag`` set the mapping uses only the diagonal scale and the
translation column (north-up rasters, no rotation or skew). Otherwise the
full matrix is applied and inverted.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from grdl_geocam.exceptions import ConfigurationError

log = logging.getLogger(__name__)


class AffineGeoTransform:
    """
    Affine pixel <-> native transform.

    Parameters
    ----------
    matrix : array_like, optional
        4x4 transform matrix. Default is the identity.
    scale_tag : bool
        Use the diagonal-scale fast path. Default False.

    Raises
    ------
    ConfigurationError
        If ``matrix`` is not 4x4.
    """

    def __init__(self, matrix=None, scale_tag: bool = False):
        if matrix is None:
            matrix = np.eye(4)
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ConfigurationError(
                f"Geo transform requires a 4x4 matrix, got shape {matrix.shape}"
            )
        self.matrix = matrix
        self.scale_tag = bool(scale_tag)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_geotransform(cls, geotransform: Sequence[float]) -> 'AffineGeoTransform':
        """
        Build from a GDAL geotransform.

        GDAL defines::

            Xgeo = GT(0) + Xpixel*GT(1) + Yline*GT(2)
            Ygeo = GT(3) + Xpixel*GT(4) + Yline*GT(5)

        Parameters
        ----------
        geotransform : sequence of float
            Six coefficients (ox, px_w, row_rot, oy, col_rot, px_h).

        Raises
        ------
        ConfigurationError
            If ``geotransform`` does not hold six values.
        """
        if len(geotransform) != 6:
            raise ConfigurationError(
                f"geotransform must have exactly 6 elements, got {len(geotransform)}"
            )
        gt = [float(v) for v in geotransform]
        m = np.eye(4)
        m[0, 3] = gt[0]
        m[0, 0] = gt[1]
        m[0, 1] = gt[2]
        m[1, 3] = gt[3]
        m[1, 0] = gt[4]
        m[1, 1] = gt[5]
        return cls(m, scale_tag=True)

    @classmethod
    def from_world_file_coefficients(cls, coefficients: Sequence[float]) -> 'AffineGeoTransform':
        """
        Build from the six world file coefficients.

        Parameters
        ----------
        coefficients : sequence of float
            (px_w, row_rot, col_rot, px_h, ox, oy) as stored in a world file.
        """
        if len(coefficients) != 6:
            raise ConfigurationError(
                f"World file requires exactly 6 coefficients, got {len(coefficients)}"
            )
        c = [float(v) for v in coefficients]
        m = np.zeros((4, 4))
        m[0, 0] = c[0]
        m[0, 1] = c[1]
        m[1, 0] = c[2]
        m[1, 1] = c[3]
        m[0, 3] = c[4]
        m[1, 3] = c[5]
        m[2, 2] = 1.0
        m[3, 3] = 1.0
        return cls(m, scale_tag=True)

    # ------------------------------------------------------------------
    # Coefficient views
    # ------------------------------------------------------------------

    def to_geotransform(self) -> Tuple[float, float, float, float, float, float]:
        """GDAL geotransform (ox, px_w, row_rot, oy, col_rot, px_h)."""
        m = self.matrix
        return (float(m[0, 3]), float(m[0, 0]), float(m[0, 1]),
                float(m[1, 3]), float(m[1, 0]), float(m[1, 1]))

    def world_file_coefficients(self) -> Tuple[float, float, float, float, float, float]:
        """World file order (px_w, row_rot, col_rot, px_h, ox, oy)."""
        m = self.matrix
        return (float(m[0, 0]), float(m[0, 1]), float(m[1, 0]),
                float(m[1, 1]), float(m[0, 3]), float(m[1, 3]))

    def _homogeneous_matrix(self) -> np.ndarray:
        tm = self.matrix.copy()
        tm[2, 2] = 1.0
        return tm

    # ------------------------------------------------------------------
    # Pixel <-> native
    # ------------------------------------------------------------------

    def pixel_to_native(self, i: float, j: float) -> Tuple[float, float]:
        """
        Map a pixel position to native coordinates.

        Parameters
        ----------
        i : float
            Column coordinate.
        j : float
            Row coordinate.

        Returns
        -------
        x, y : float
            Native coordinates.
        """
        m = self.matrix
        if self.scale_tag:
            return (float(m[0, 3] + i * m[0, 0]),
                    float(m[1, 3] + j * m[1, 1]))
        res = self._homogeneous_matrix() @ np.array([i, j, 0.0, 1.0])
        return float(res[0]), float(res[1])

    def native_to_pixel(self, x: float, y: float, z: float = 0.0) -> Tuple[float, float]:
        """
        Map native coordinates to a pixel position.

        A singular matrix on the general path yields NaN rather than an
        exception; callers must validate invertibility upstream.

        Parameters
        ----------
        x, y : float
            Native coordinates.
        z : float
            Native elevation, only used on the general path.

        Returns
        -------
        u, v : float
            Column and row coordinates.
        """
        m = self.matrix
        if self.scale_tag:
            with np.errstate(divide='ignore', invalid='ignore'):
                u = (np.float64(x) - m[0, 3]) / m[0, 0]
                v = (np.float64(y) - m[1, 3]) / m[1, 1]
            return float(u), float(v)

        try:
            inv = np.linalg.inv(self._homogeneous_matrix())
        except np.linalg.LinAlgError:
            log.warning("Singular geo transform matrix, pixel position undefined")
            return float('nan'), float('nan')
        res = inv @ np.array([x, y, z, 1.0])
        return float(res[0]), float(res[1])

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def translate(self, tx: float, ty: float) -> None:
        """
        Move the pixel origin by (tx, ty) pixels.

        After the call, pixel (0, 0) maps to what pixel (tx, ty) mapped to.
        """
        m = self.matrix
        if self.scale_tag:
            m[0, 3] += tx * m[0, 0]
            m[1, 3] += ty * m[1, 1]
        else:
            m[:2, 3] += m[:2, :2] @ np.array([tx, ty], dtype=np.float64)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> 'AffineGeoTransform':
        return AffineGeoTransform(self.matrix.copy(), self.scale_tag)

    def __eq__(self, other):
        if not isinstance(other, AffineGeoTransform):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    __hash__ = None

    def __repr__(self):
        return (f"AffineGeoTransform(matrix={self.matrix.tolist()!r}, "
                f"scale_tag={self.scale_tag})")

    def __str__(self):
        return '\n'.join(
            ' '.join(f"{v:.12g}" for v in row) for row in self.matrix
        )


__all__ = ["AffineGeoTransform"]
