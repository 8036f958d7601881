# -*- coding: utf-8 -*-
"""
Geo Camera - Georeferenced raster camera model.

A ``GeoCamera`` combines an affine pixel <-> native transform, the UTM
addressing of the native coordinates, an optional local vertical
coordinate system and the ground pixel spacing derived from them. It
projects local 3D points to pixels and back-projects pixels to local
points.

Native coordinates are WGS-84 (lon, lat) in degrees unless the camera
is UTM-addressed, in which case they are (easting, northing) in meters.

Examples
--------
>>> cam = GeoCamera.from_geotransform([500000.0, 0.5, 0.0, 4400000.0, 0.0, -0.5],
...                                   utm_zone=18)
>>> cam.pixel_spacing()
(0.5, 0.5)
>>> lon, lat = cam.img_to_global(100.0, 200.0)

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import copy
import io
import logging
import math
from typing import BinaryIO, Callable, Optional, Sequence, Tuple

import numpy as np

from grdl_geocam.camera import adapters
from grdl_geocam.camera.adapters import CanonicalTransform, UTMMetadata
from grdl_geocam.camera.frames import Frame, resolve_frame
from grdl_geocam.camera.serialization import GeoCameraRecord, read_record, write_record
from grdl_geocam.camera.transform import AffineGeoTransform
from grdl_geocam.exceptions import ConfigurationError, FormatError, GeoCameraError
from grdl_geocam.geometry.lvcs import ContextKind, GlobalFrame, LocalVerticalCS
from grdl_geocam.geometry.utm import UTMConverter
from grdl_geocam.io.geotiff_header import GeoTiffHeaderSource
from grdl_geocam.io.world_file import write_world_file
from grdl_geocam.utils.constants import PIXEL_SIZE_BASELINE, UTM_NUM_ZONES

log = logging.getLogger(__name__)

_UTM = UTMConverter()


class GeoCamera:
    """
    Camera mapping raster pixels to geographic and local coordinates.

    Parameters
    ----------
    matrix : array_like or AffineGeoTransform, optional
        4x4 transform matrix, or a transform (copied). Default identity.
    lvcs : LocalVerticalCS, optional
        Coordinate context; the camera keeps its own copy.
    scale_tag : bool
        Diagonal-scale fast path; ignored when ``matrix`` is a transform.
    utm : UTMMetadata, optional
        UTM addressing of the native coordinates. Default WGS-84.

    Raises
    ------
    ConfigurationError
        If ``matrix`` is not 4x4.
    """

    def __init__(
        self,
        matrix=None,
        lvcs: Optional[LocalVerticalCS] = None,
        scale_tag: bool = False,
        utm: Optional[UTMMetadata] = None
    ):
        if isinstance(matrix, AffineGeoTransform):
            self.transform = matrix.copy()
        else:
            self.transform = AffineGeoTransform(matrix, scale_tag)
        self.utm = utm if utm is not None else UTMMetadata()
        self._lvcs = lvcs.copy() if lvcs is not None else None
        self.sx = 0.0
        self.sy = 0.0
        self.extract_pixel_size()

    # ------------------------------------------------------------------
    # Construction from metadata sources
    # ------------------------------------------------------------------

    @classmethod
    def from_canonical(
        cls,
        canonical: CanonicalTransform,
        lvcs: Optional[LocalVerticalCS] = None
    ) -> 'GeoCamera':
        """Build a camera from an adapter result."""
        return cls(canonical.transform, lvcs, utm=canonical.utm)

    @classmethod
    def from_geotiff_header(
        cls,
        header: GeoTiffHeaderSource,
        lvcs: Optional[LocalVerticalCS] = None
    ) -> 'GeoCamera':
        """
        Build a camera from GeoTIFF georeferencing metadata.

        Raises
        ------
        ConfigurationError
            See ``adapters.from_geotiff_header``.
        """
        return cls.from_canonical(adapters.from_geotiff_header(header), lvcs)

    @classmethod
    def from_geotransform(
        cls,
        geotransform: Sequence[float],
        utm_zone: int = 0,
        southern: bool = False,
        lvcs: Optional[LocalVerticalCS] = None
    ) -> 'GeoCamera':
        """
        Build a camera from a GDAL geotransform.

        Raises
        ------
        ConfigurationError
            If ``geotransform`` does not hold six values.
        """
        return cls.from_canonical(
            adapters.from_geotransform(geotransform, utm_zone, southern), lvcs
        )

    @classmethod
    def from_tile_filename(
        cls,
        filename: str,
        ni: int,
        nj: int,
        lvcs: Optional[LocalVerticalCS] = None,
        global_coords: bool = False
    ) -> 'GeoCamera':
        """
        Build a camera from a tile file name such as ``dem_N35W73_S0.6x0.6.tif``.

        Raises
        ------
        FormatError
            If the file name cannot be parsed.
        """
        return cls.from_canonical(
            adapters.from_tile_filename(filename, ni, nj, global_coords), lvcs
        )

    @classmethod
    def from_world_file(
        cls,
        filename: str,
        lvcs: Optional[LocalVerticalCS] = None,
        utm_zone: int = 0,
        southern: bool = False
    ) -> 'GeoCamera':
        """
        Build a camera from a world file.

        Raises
        ------
        FormatError
            If the file cannot be opened or is corrupt.
        """
        return cls.from_canonical(
            adapters.from_world_file(filename, utm_zone, southern), lvcs
        )

    def _load(self, build: Callable[..., CanonicalTransform], lvcs, *args) -> bool:
        try:
            canonical = build(*args)
        except GeoCameraError as e:
            log.error("Cannot build geo camera with %s: %s", build.__name__, e)
            return False
        self.transform = canonical.transform.copy()
        self.utm = canonical.utm
        self._lvcs = lvcs.copy() if lvcs is not None else None
        self.extract_pixel_size()
        return True

    def load_from_geotiff_header(
        self,
        header: GeoTiffHeaderSource,
        lvcs: Optional[LocalVerticalCS] = None
    ) -> bool:
        """Replace this camera's state from GeoTIFF metadata; False on failure."""
        return self._load(adapters.from_geotiff_header, lvcs, header)

    def load_from_geotransform(
        self,
        geotransform: Sequence[float],
        utm_zone: int = 0,
        southern: bool = False,
        lvcs: Optional[LocalVerticalCS] = None
    ) -> bool:
        """Replace this camera's state from a GDAL geotransform; False on failure."""
        return self._load(adapters.from_geotransform, lvcs, geotransform, utm_zone, southern)

    def load_from_tile_filename(
        self,
        filename: str,
        ni: int,
        nj: int,
        lvcs: Optional[LocalVerticalCS] = None,
        global_coords: bool = False
    ) -> bool:
        """Replace this camera's state from a tile file name; False on failure."""
        return self._load(adapters.from_tile_filename, lvcs, filename, ni, nj, global_coords)

    def load_from_world_file(
        self,
        filename: str,
        lvcs: Optional[LocalVerticalCS] = None,
        utm_zone: int = 0,
        southern: bool = False
    ) -> bool:
        """Replace this camera's state from a world file; False on failure."""
        return self._load(adapters.from_world_file, lvcs, filename, utm_zone, southern)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        return self.transform.matrix

    @property
    def scale_tag(self) -> bool:
        return self.transform.scale_tag

    @property
    def is_utm(self) -> bool:
        return self.utm.is_utm

    @property
    def utm_zone(self) -> int:
        return self.utm.utm_zone

    @property
    def southern(self) -> bool:
        return self.utm.southern

    @property
    def lvcs(self) -> Optional[LocalVerticalCS]:
        """The owned coordinate context, or None."""
        return self._lvcs

    @property
    def context_kind(self) -> ContextKind:
        if self._lvcs is None:
            return ContextKind.NONE
        return self._lvcs.kind

    @property
    def frame(self) -> Frame:
        """Effective frame between local and global coordinates."""
        return resolve_frame(self.context_kind, self.is_utm)

    def set_lvcs(self, lvcs: Optional[LocalVerticalCS]) -> None:
        """Attach a copy of ``lvcs`` (or detach with None)."""
        self._lvcs = lvcs.copy() if lvcs is not None else None
        self.extract_pixel_size()

    def set_utm(self, utm_zone: int, southern: bool = False) -> None:
        """
        Mark native coordinates as UTM in the given zone and hemisphere.

        Raises
        ------
        ConfigurationError
            If ``utm_zone`` is outside [1, 60]; the camera is left unchanged.
        """
        utm_zone = int(utm_zone)
        if not 1 <= utm_zone <= UTM_NUM_ZONES:
            raise ConfigurationError(
                f"UTM zone must be in [1, {UTM_NUM_ZONES}], got {utm_zone}"
            )
        self.utm = UTMMetadata(True, utm_zone, bool(southern))
        self.extract_pixel_size()

    def set_scale_format(self, scale_tag: bool) -> None:
        self.transform.scale_tag = bool(scale_tag)
        self.extract_pixel_size()

    def translate(self, tx: float, ty: float, tz: float = 0.0) -> None:
        """
        Shift the image origin by (tx, ty) pixels.

        ``tz`` is accepted for interface symmetry and ignored.
        """
        self.transform.translate(tx, ty)
        self.extract_pixel_size()

    # ------------------------------------------------------------------
    # Pixel spacing
    # ------------------------------------------------------------------

    def extract_pixel_size(self) -> None:
        """
        Compute the ground pixel spacing (meters) along each image axis.

        UTM cameras on the scale path read it from the matrix. Otherwise
        the pixels (0, 0), (P, 0) and (0, P) are mapped to a local frame
        (the attached context, or a WGS-84 one at pixel (0, 0)) and the
        distances divided by P.
        """
        if self.is_utm and self.scale_tag:
            self.sx = float(self.matrix[0, 0])
            self.sy = float(abs(self.matrix[1, 1]))
            return

        lon0, lat0 = self.img_to_global(0.0, 0.0)
        if self._lvcs is not None:
            lvcs = self._lvcs.copy()
        else:
            lvcs = LocalVerticalCS(lat0, lon0, 0.0, ContextKind.WGS84)

        step = PIXEL_SIZE_BASELINE
        lonx, latx = self.img_to_global(step, 0.0)
        lony, laty = self.img_to_global(0.0, step)
        x0, y0, _ = lvcs.global_to_local(lon0, lat0, 0.0, GlobalFrame.WGS84)
        x1, y1, _ = lvcs.global_to_local(lonx, latx, 0.0, GlobalFrame.WGS84)
        x2, y2, _ = lvcs.global_to_local(lony, laty, 0.0, GlobalFrame.WGS84)
        self.sx = math.hypot(x1 - x0, y1 - y0) / step
        self.sy = math.hypot(x2 - x0, y2 - y0) / step
        log.debug("Pixel spacing estimated as %g x %g", self.sx, self.sy)

    def pixel_spacing(self) -> Tuple[float, float]:
        """Ground pixel spacing (sx, sy) in meters."""
        return self.sx, self.sy

    # ------------------------------------------------------------------
    # Pixel <-> global
    # ------------------------------------------------------------------

    def img_to_global(self, i: float, j: float) -> Tuple[float, float]:
        """
        WGS-84 (lon, lat) of a pixel position.

        UTM native coordinates are inverted with the camera's zone and
        hemisphere.
        """
        x, y = self.transform.pixel_to_native(i, j)
        if self.is_utm:
            lat, lon, _ = _UTM.to_latlon(self.utm_zone, x, y, 0.0, self.southern)
            return lon, lat
        return x, y

    def global_to_img(self, lon: float, lat: float, elev: float = 0.0) -> Tuple[float, float]:
        """Pixel position (u, v) of a WGS-84 point."""
        x, y = lon, lat
        if self.is_utm:
            x, y, _ = _UTM.to_utm(lat, lon, elev, zone=self.utm_zone, southern=self.southern)
        return self.transform.native_to_pixel(x, y, elev)

    def img_to_global_utm(self, i: float, j: float) -> Tuple[float, float]:
        """UTM (easting, northing) of a pixel position."""
        x, y = self.transform.pixel_to_native(i, j)
        if self.is_utm:
            return x, y
        easting, northing, _ = _UTM.to_utm(y, x)
        return easting, northing

    def global_utm_to_img(
        self,
        easting: float,
        northing: float,
        zone: int,
        elev: float = 0.0,
        southern: bool = False
    ) -> Tuple[float, float]:
        """
        Pixel position (u, v) of a UTM point.

        ``zone`` and ``southern`` are used only to invert the point when
        the camera is not UTM-addressed.
        """
        if self.is_utm:
            return self.transform.native_to_pixel(easting, northing, elev)
        lat, lon, z = _UTM.to_latlon(zone, easting, northing, elev, southern)
        return self.transform.native_to_pixel(lon, lat, z)

    def img_four_corners_in_utm(
        self,
        ni: int,
        nj: int,
        elev: float = 0.0
    ) -> Tuple[float, float, float, float]:
        """
        UTM coordinates of pixels (0, 0) and (ni, nj).

        Returns
        -------
        e1, n1, e2, n2 : float

        Raises
        ------
        ConfigurationError
            If the camera is not UTM-addressed.
        """
        if not self.is_utm:
            raise ConfigurationError("UTM has not been set for this geo camera")
        e1, n1 = self.img_to_global_utm(0.0, 0.0)
        e2, n2 = self.img_to_global_utm(float(ni), float(nj))
        return e1, n1, e2, n2

    # ------------------------------------------------------------------
    # Local <-> global
    # ------------------------------------------------------------------

    def local_to_global(self, x: float, y: float, z: float) -> Tuple[float, float, float]:
        """
        Global coordinates of a local point in the effective frame.

        Without a context the point is returned unchanged (taken as
        lon, lat, elev).
        """
        frame = self.frame
        if frame is Frame.IDENTITY:
            return x, y, z
        return self._lvcs.local_to_global(x, y, z, frame.global_frame)

    def global_to_local(
        self,
        gx: float,
        gy: float,
        gz: float
    ) -> Optional[Tuple[float, float, float]]:
        """
        Local coordinates of a global point in the effective frame.

        Returns
        -------
        tuple of float or None
            None when no context is attached.
        """
        frame = self.frame
        if frame is Frame.IDENTITY:
            log.warning("No local vertical coordinate system defined, "
                        "cannot map global to local")
            return None
        return self._lvcs.global_to_local(gx, gy, gz, frame.global_frame)

    def lvcs_elev_origin(self) -> float:
        """Elevation of the context origin, 0 without a context."""
        if self._lvcs is None:
            return 0.0
        if self._lvcs.kind == ContextKind.UTM:
            return self._lvcs.utm_origin[2]
        return self._lvcs.origin[2]

    def local_to_utm(self, x: float, y: float, z: float) -> Tuple[float, float, int]:
        """
        UTM (easting, northing, zone) of a local point.

        Raises
        ------
        ConfigurationError
            If no context is attached.
        """
        if self._lvcs is None:
            raise ConfigurationError("A coordinate context is required to map local to UTM")
        lon, lat, _ = self._lvcs.local_to_global(x, y, z, GlobalFrame.WGS84)
        return _UTM.to_utm(lat, lon)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project(self, x: float, y: float, z: float) -> Tuple[float, float]:
        """
        Project a local 3D point to a pixel position (u, v).

        Without a context the point is taken as (lon, lat, elev).
        """
        frame = self.frame
        if frame is Frame.IDENTITY:
            return self.global_to_img(x, y, z)
        if frame is Frame.UTM:
            gx, gy, gz = self._lvcs.local_to_global(x, y, z, GlobalFrame.UTM)
            return self.global_utm_to_img(gx, gy, self.utm_zone, gz, self.southern)
        lon, lat, gz = self._lvcs.local_to_global(x, y, z, GlobalFrame.WGS84)
        return self.global_to_img(lon, lat, gz)

    def backproject(self, u: float, v: float) -> Tuple[float, float, float]:
        """
        Back-project a pixel position to a local point on the native surface.

        Without a context the WGS-84 (lon, lat, 0) of the pixel is returned.
        """
        frame = self.frame
        if frame is Frame.UTM:
            x, y = self.transform.pixel_to_native(u, v)
            return self._lvcs.global_to_local(x, y, 0.0, GlobalFrame.UTM)
        lon, lat = self.img_to_global(u, v)
        if frame is Frame.IDENTITY:
            return lon, lat, 0.0
        return self._lvcs.global_to_local(lon, lat, 0.0, GlobalFrame.WGS84)

    # ------------------------------------------------------------------
    # File output
    # ------------------------------------------------------------------

    def save_as_tfw(self, filename: str) -> None:
        """Write the transform as a world file."""
        write_world_file(filename, self.transform.world_file_coefficients())

    # ------------------------------------------------------------------
    # Binary I/O
    # ------------------------------------------------------------------

    def b_write(self, stream: BinaryIO) -> None:
        """Write this camera as a versioned binary record."""
        write_record(stream, GeoCameraRecord(
            self.matrix, self._lvcs, self.utm, self.scale_tag
        ))

    @classmethod
    def b_read(cls, stream: BinaryIO) -> 'GeoCamera':
        """
        Read a camera written by ``b_write``.

        Raises
        ------
        UnsupportedVersionError
            If the record version is unknown.
        FormatError
            If the record is truncated or malformed.
        """
        record = read_record(stream)
        return cls(record.matrix, record.lvcs, record.scale_tag, record.utm)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.b_write(buf)
        return buf.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'GeoCamera':
        return cls.b_read(io.BytesIO(data))

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> 'GeoCamera':
        """Independent copy, including the coordinate context."""
        return copy.deepcopy(self)

    def __copy__(self):
        return self.copy()

    def __eq__(self, other):
        # UTM metadata and scale_tag do not take part in equality
        if not isinstance(other, GeoCamera):
            return NotImplemented
        return self.transform == other.transform and self._lvcs == other._lvcs

    __hash__ = None

    def __repr__(self):
        return (f"GeoCamera(matrix={self.matrix.tolist()!r}, lvcs={self._lvcs!r}, "
                f"scale_tag={self.scale_tag}, utm={self.utm!r})")

    def __str__(self):
        lines = [str(self.transform)]
        if self._lvcs is not None:
            lines.append(str(self._lvcs))
        if self.is_utm:
            hemisphere = 'southern' if self.southern else 'northern'
            lines.append(f"UTM zone {self.utm_zone}, {hemisphere}")
        else:
            lines.append("WGS84 degrees/meters")
        return '\n'.join(lines)

    @classmethod
    def from_text(cls, text, scale_tag: bool = False) -> 'GeoCamera':
        """
        Parse a camera from the text written by ``str()``.

        Parameters
        ----------
        text : str or text stream
            Four matrix rows, an optional context block, then either
            ``WGS84 degrees/meters`` or ``UTM zone Z, northern|southern``.
        scale_tag : bool
            Fast-path flag; it is not part of the text form.

        Returns
        -------
        GeoCamera

        Raises
        ------
        FormatError
            If any part of the text is malformed.
        """
        if hasattr(text, 'read'):
            text = text.read()
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if len(lines) < 5:
            raise FormatError(
                f"Camera text needs 4 matrix rows and a frame line, got {len(lines)} lines"
            )

        try:
            rows = [[float(v) for v in line.split()] for line in lines[:4]]
        except ValueError:
            raise FormatError("Non-numeric value in camera matrix rows") from None
        if any(len(row) != 4 for row in rows):
            raise FormatError("Camera matrix rows must hold 4 values each")

        lvcs = None
        if len(lines) > 5:
            lvcs = LocalVerticalCS.from_text('\n'.join(lines[4:-1]))

        return cls(rows, lvcs, scale_tag, _parse_frame_line(lines[-1]))


def _parse_frame_line(line: str) -> UTMMetadata:
    if line == "WGS84 degrees/meters":
        return UTMMetadata()
    tokens = line.replace(',', ' ').split()
    if len(tokens) != 4 or tokens[:2] != ['UTM', 'zone'] or \
            tokens[3] not in ('northern', 'southern'):
        raise FormatError(f"Unrecognized frame line '{line}'")
    try:
        zone = int(tokens[2])
    except ValueError:
        raise FormatError(f"Non-integer UTM zone in '{line}'") from None
    if not 1 <= zone <= UTM_NUM_ZONES:
        raise FormatError(f"UTM zone must be in [1, {UTM_NUM_ZONES}], got {zone}")
    return UTMMetadata(True, zone, tokens[3] == 'southern')


__all__ = ["GeoCamera"]
