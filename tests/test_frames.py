# -*- coding: utf-8 -*-
"""Tests for effective frame resolution."""
import pytest
from grdl_geocam.camera.frames import Frame, resolve_frame
from grdl_geocam.geometry.lvcs import ContextKind, GlobalFrame


@pytest.mark.parametrize("kind, is_utm, frame", [
    (ContextKind.NONE, False, Frame.IDENTITY),
    (ContextKind.NONE, True, Frame.IDENTITY),
    (ContextKind.UTM, True, Frame.UTM),
    (ContextKind.UTM, False, Frame.WGS84),
    (ContextKind.WGS84, True, Frame.WGS84),
    (ContextKind.WGS84, False, Frame.WGS84),
])
def test_resolve_frame(kind, is_utm, frame):
    assert resolve_frame(kind, is_utm) is frame


def test_resolve_frame_accepts_codes():
    assert resolve_frame(2, True) is Frame.UTM


def test_global_frame():
    assert Frame.IDENTITY.global_frame is None
    assert Frame.UTM.global_frame is GlobalFrame.UTM
    assert Frame.WGS84.global_frame is GlobalFrame.WGS84
