# -*- coding: utf-8 -*-
"""
Frame Dispatch - Resolve the global frame used for local conversions.

The global frame a camera converts local points through depends on the
kind of its coordinate context and on whether the camera itself is
UTM-addressed:

=============  ============  ==========
context kind   camera UTM    frame
=============  ============  ==========
none           any           identity
utm            True          UTM
utm            False         WGS-84
wgs84          any           WGS-84
=============  ============  ==========

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from enum import Enum
from typing import Optional

from grdl_geocam.geometry.lvcs import ContextKind, GlobalFrame


class Frame(Enum):
    """Effective frame between local and global coordinates."""
    IDENTITY = 'identity'
    WGS84 = 'wgs84'
    UTM = 'utm'

    @property
    def global_frame(self) -> Optional[GlobalFrame]:
        """Matching context frame; None for the identity pass-through."""
        if self is Frame.IDENTITY:
            return None
        return GlobalFrame(self.value)


def resolve_frame(kind: ContextKind, is_utm: bool) -> Frame:
    """
    Resolve the effective frame.

    Parameters
    ----------
    kind : ContextKind
        Kind of the attached coordinate context (``NONE`` if absent).
    is_utm : bool
        Whether the camera's native coordinates are UTM.

    Returns
    -------
    Frame
    """
    kind = ContextKind(kind)
    if kind == ContextKind.NONE:
        return Frame.IDENTITY
    if kind == ContextKind.UTM and is_utm:
        return Frame.UTM
    return Frame.WGS84


__all__ = ["Frame", "resolve_frame"]
