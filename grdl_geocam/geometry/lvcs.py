# -*- coding: utf-8 -*-
"""
Local Vertical Coordinate System - Tangent plane frame anchored at an origin.

A ``LocalVerticalCS`` maps local metric coordinates to and from global
WGS-84 (lon, lat, elev) or UTM (easting, northing, elev) coordinates.

Two kinds are supported:

- ``ContextKind.WGS84``: local axes are East-North-Up on the tangent
  plane at the geodetic origin.
- ``ContextKind.UTM``: local axes are UTM easting/northing/elevation
  offsets from the origin projected into its own UTM zone.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from enum import Enum, IntEnum
from typing import BinaryIO, Tuple
import copy

from grdl_geocam.exceptions import FormatError, UnsupportedVersionError
from grdl_geocam.geometry.coordinates import enu_to_geodetic, geodetic_to_enu
from grdl_geocam.geometry.utm import UTMConverter
from grdl_geocam.io.binary import BinaryReader, BinaryWriter
from grdl_geocam.utils.constants import LVCS_FORMAT_VERSION


class ContextKind(IntEnum):
    """Kind of coordinate context; values are the binary record codes."""
    NONE = 0
    WGS84 = 1
    UTM = 2


class GlobalFrame(Enum):
    """Global coordinate frame a context converts to or from."""
    WGS84 = 'wgs84'
    UTM = 'utm'


_UTM = UTMConverter()

# Kind names as written by LocalVerticalCS.__str__
_KIND_NAMES = {'wgs84': ContextKind.WGS84, 'utm': ContextKind.UTM}


class LocalVerticalCS:
    """
    Local vertical coordinate system anchored at a geodetic origin.

    Parameters
    ----------
    origin_lat : float
        Origin latitude in degrees.
    origin_lon : float
        Origin longitude in degrees.
    origin_elev : float
        Origin height in meters.
    kind : ContextKind
        ``ContextKind.WGS84`` or ``ContextKind.UTM``.

    Raises
    ------
    ValueError
        If ``kind`` is ``ContextKind.NONE``.
    """

    def __init__(
        self,
        origin_lat: float = 0.0,
        origin_lon: float = 0.0,
        origin_elev: float = 0.0,
        kind: ContextKind = ContextKind.WGS84
    ):
        kind = ContextKind(kind)
        if kind == ContextKind.NONE:
            raise ValueError("A coordinate context must be of kind WGS84 or UTM")
        self.kind = kind
        self.origin_lat = float(origin_lat)
        self.origin_lon = float(origin_lon)
        self.origin_elev = float(origin_elev)
        self._update_utm_origin()

    def _update_utm_origin(self) -> None:
        self.utm_southern = self.origin_lat < 0.0
        self.utm_easting, self.utm_northing, self.utm_zone = _UTM.to_utm(
            self.origin_lat, self.origin_lon
        )

    # ------------------------------------------------------------------
    # Origin accessors
    # ------------------------------------------------------------------

    @property
    def origin(self) -> Tuple[float, float, float]:
        """Geodetic origin as (lat, lon, elev)."""
        return self.origin_lat, self.origin_lon, self.origin_elev

    @property
    def utm_origin(self) -> Tuple[float, float, float, int]:
        """Origin in its own UTM zone as (easting, northing, elev, zone)."""
        return self.utm_easting, self.utm_northing, self.origin_elev, self.utm_zone

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def local_to_global(
        self,
        x: float,
        y: float,
        z: float,
        frame: GlobalFrame = GlobalFrame.WGS84
    ) -> Tuple[float, float, float]:
        """
        Convert a local point to global coordinates.

        Parameters
        ----------
        x, y, z : float
            Local coordinates in meters.
        frame : GlobalFrame
            Output frame.

        Returns
        -------
        tuple of float
            (lon, lat, elev) for ``GlobalFrame.WGS84``, or
            (easting, northing, elev) for ``GlobalFrame.UTM`` in the
            origin's zone.
        """
        frame = GlobalFrame(frame)
        if self.kind == ContextKind.UTM:
            easting = self.utm_easting + x
            northing = self.utm_northing + y
            elev = self.origin_elev + z
            if frame == GlobalFrame.UTM:
                return easting, northing, elev
            lat, lon, elev = _UTM.to_latlon(
                self.utm_zone, easting, northing, elev, self.utm_southern
            )
            return lon, lat, elev

        lat, lon, elev = enu_to_geodetic(x, y, z, self.origin)
        if frame == GlobalFrame.WGS84:
            return lon, lat, elev
        easting, northing, _ = _UTM.to_utm(
            lat, lon, elev, zone=self.utm_zone, southern=self.utm_southern
        )
        return easting, northing, elev

    def global_to_local(
        self,
        gx: float,
        gy: float,
        gz: float,
        frame: GlobalFrame = GlobalFrame.WGS84
    ) -> Tuple[float, float, float]:
        """
        Convert a global point to local coordinates.

        Parameters
        ----------
        gx, gy, gz : float
            (lon, lat, elev) for ``GlobalFrame.WGS84``, or
            (easting, northing, elev) in the origin's zone for
            ``GlobalFrame.UTM``.
        frame : GlobalFrame
            Input frame.

        Returns
        -------
        x, y, z : float
            Local coordinates in meters.
        """
        frame = GlobalFrame(frame)
        if self.kind == ContextKind.UTM:
            if frame == GlobalFrame.UTM:
                easting, northing = gx, gy
            else:
                easting, northing, _ = _UTM.to_utm(
                    gy, gx, gz, zone=self.utm_zone, southern=self.utm_southern
                )
            return (easting - self.utm_easting,
                    northing - self.utm_northing,
                    gz - self.origin_elev)

        if frame == GlobalFrame.UTM:
            lat, lon, _ = _UTM.to_latlon(
                self.utm_zone, gx, gy, gz, self.utm_southern
            )
        else:
            lon, lat = gx, gy
        enu = geodetic_to_enu(lat, lon, gz, self.origin)
        return float(enu[0]), float(enu[1]), float(enu[2])

    # ------------------------------------------------------------------
    # Binary I/O
    # ------------------------------------------------------------------

    def b_write(self, stream: BinaryIO) -> None:
        """Write this context as a versioned binary record."""
        write_lvcs(stream, self)

    @classmethod
    def b_read(cls, stream: BinaryIO) -> 'LocalVerticalCS':
        """
        Read a context record written by ``b_write``.

        Raises
        ------
        ValueError
            If the record holds no context.
        """
        lvcs = read_lvcs(stream)
        if lvcs is None:
            raise ValueError("Binary record holds no coordinate context")
        return lvcs

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> 'LocalVerticalCS':
        return copy.deepcopy(self)

    def __eq__(self, other):
        if not isinstance(other, LocalVerticalCS):
            return NotImplemented
        return (self.kind == other.kind and
                self.origin == other.origin)

    __hash__ = None

    def __repr__(self):
        return (f"LocalVerticalCS(origin_lat={self.origin_lat!r}, "
                f"origin_lon={self.origin_lon!r}, "
                f"origin_elev={self.origin_elev!r}, kind={self.kind.name})")

    def __str__(self):
        lines = [
            f"lvcs {self.kind.name.lower()}",
            f"origin lat {self.origin_lat:.12g} lon {self.origin_lon:.12g} "
            f"elev {self.origin_elev:.12g}",
        ]
        if self.kind == ContextKind.UTM:
            hemisphere = 'southern' if self.utm_southern else 'northern'
            lines.append(
                f"utm origin {self.utm_easting:.12g} {self.utm_northing:.12g} "
                f"zone {self.utm_zone} {hemisphere}"
            )
        return '\n'.join(lines)

    @classmethod
    def from_text(cls, text: str) -> 'LocalVerticalCS':
        """
        Parse a context from the text written by ``str()``.

        The ``utm origin`` line, if present, is derived data and is not
        read back.

        Raises
        ------
        FormatError
            If the kind or origin lines are missing or malformed.
        """
        lines = [line.split() for line in text.splitlines() if line.strip()]
        if len(lines) < 2:
            raise FormatError("Context text needs 'lvcs <kind>' and 'origin ...' lines")

        header, origin = lines[0], lines[1]
        if len(header) != 2 or header[0] != 'lvcs':
            raise FormatError(f"Expected 'lvcs <kind>', got '{' '.join(header)}'")
        kind = _KIND_NAMES.get(header[1])
        if kind is None:
            raise FormatError(f"Unknown coordinate context kind '{header[1]}'")

        if len(origin) != 7 or origin[:2] != ['origin', 'lat'] or \
                origin[3] != 'lon' or origin[5] != 'elev':
            raise FormatError(f"Malformed origin line '{' '.join(origin)}'")
        try:
            lat, lon, elev = float(origin[2]), float(origin[4]), float(origin[6])
        except ValueError:
            raise FormatError(f"Non-numeric origin in '{' '.join(origin)}'") from None
        return cls(lat, lon, elev, kind)


def write_lvcs(stream: BinaryIO, lvcs) -> None:
    """
    Write an optional context record.

    Layout: version int16, kind uint8, then origin lat, lon, elev as
    float64 unless the kind is ``ContextKind.NONE``.

    Parameters
    ----------
    stream : BinaryIO
        Writable binary stream.
    lvcs : LocalVerticalCS or None
        Context to write; None writes a kind ``NONE`` record.
    """
    writer = BinaryWriter(stream)
    writer.write_short(LVCS_FORMAT_VERSION)
    if lvcs is None:
        writer.write_byte(ContextKind.NONE)
        return
    writer.write_byte(lvcs.kind)
    writer.write_double(lvcs.origin_lat)
    writer.write_double(lvcs.origin_lon)
    writer.write_double(lvcs.origin_elev)


def read_lvcs(stream: BinaryIO):
    """
    Read an optional context record written by ``write_lvcs``.

    Returns
    -------
    LocalVerticalCS or None
        None for a kind ``NONE`` record.

    Raises
    ------
    UnsupportedVersionError
        If the record version is not supported.
    FormatError
        If the stream ends early or the kind code is unknown.
    """
    reader = BinaryReader(stream)
    version = reader.read_short()
    if version != LVCS_FORMAT_VERSION:
        raise UnsupportedVersionError(version, 'lvcs')
    code = reader.read_byte()
    try:
        kind = ContextKind(code)
    except ValueError:
        raise FormatError(f"Unknown coordinate context kind code {code}") from None
    if kind == ContextKind.NONE:
        return None
    lat = reader.read_double()
    lon = reader.read_double()
    elev = reader.read_double()
    return LocalVerticalCS(lat, lon, elev, kind)


__all__ = [
    "ContextKind",
    "GlobalFrame",
    "LocalVerticalCS",
    "write_lvcs",
    "read_lvcs",
]
